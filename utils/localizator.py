import json
from pathlib import Path
from typing import Optional

import config
from enums.message_entity import MessageEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


class Localizator:

    @staticmethod
    def _load(language: str) -> dict:
        localization_file = L10N_DIR / f"{language}.json"
        with open(localization_file, "r", encoding="UTF-8") as f:
            return json.loads(f.read())

    @staticmethod
    def get_text(entity: MessageEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (USER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "en").
                  If None, uses config.LANGUAGE (default).

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(MessageEntity.USER, "cart_item_added", lang="en")
        """
        # Use provided lang or fall back to global config
        language = lang if lang is not None else config.LANGUAGE
        data = Localizator._load(language)
        if entity == MessageEntity.USER:
            return data["user"][key]
        else:
            return data["common"][key]

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None):
        return Localizator.get_text(MessageEntity.COMMON, f"{config.CURRENCY.value.lower()}_symbol", lang=lang)
