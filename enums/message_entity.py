from enum import Enum


class MessageEntity(Enum):
    USER = "user"
    COMMON = "common"
