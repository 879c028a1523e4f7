import argparse
import asyncio
import logging
import sys
from datetime import datetime

import config
from enums.date_field import DateField
from enums.message_entity import MessageEntity
from enums.rental_duration import RentalDuration
from models.auth import AuthContextDTO
from services.date_range import DateRangeResolver
from services.pricing import PricingService
from services.storefront import RentalStorefront
from utils.config_validator import validate_or_exit
from utils.error_handler import safe_service_call
from utils.localizator import Localizator
from utils.logging_config import setup_logging
from utils.money import format_currency

logger = logging.getLogger(__name__)


def _toast(message: str):
    print(f"! {message}", file=sys.stderr)


def _user_text(key: str, **kwargs) -> str:
    return Localizator.get_text(MessageEntity.USER, key).format(**kwargs)


def _select_dates(shop: RentalStorefront, delivery: datetime | None, pickup: datetime | None):
    if delivery is not None:
        shop.select_date(delivery)
    if pickup is not None:
        shop.focus(DateField.PICKUP)
        shop.select_date(pickup)


def _print_cart(shop: RentalStorefront):
    snapshot = shop.cart.snapshot
    if snapshot.is_empty:
        print(_user_text("cart_empty"))
        return
    for line in snapshot.lines:
        name = line.product.name if line.product is not None else line.product_id
        period = DateRangeResolver.chargeable_period(line.rental_start, line.rental_end)
        print(f"{line.id}  {name} x{line.quantity}  {period}  {format_currency(line.total_price)}")
    print(f"Total: {format_currency(snapshot.total_amount)}")
    if snapshot.applied_coupon is not None:
        print(f"Coupon {snapshot.applied_coupon.code}: -{format_currency(snapshot.discount_amount)}")
        print(f"Payable: {format_currency(snapshot.amount_after_discount)}")


@safe_service_call(notify=_toast)
async def list_products(shop: RentalStorefront, args):
    for product in await shop.list_products(args.category):
        rates = ", ".join(
            f"{duration.value} {format_currency(product.rate_for(duration))}"
            for duration in PricingService.available_durations(product)
        )
        print(f"{product.id}  {product.name} [{product.category}]  stock {product.quantity_on_hand}  {rates}")


@safe_service_call(notify=_toast)
async def quote(shop: RentalStorefront, args):
    product = await shop.get_product(args.product_id)
    _select_dates(shop, args.delivery, args.pickup)
    result = shop.quote(product, args.duration, args.quantity)
    state = shop.state().date_range
    period = DateRangeResolver.chargeable_period(state.delivery_date, state.pickup_date)
    print(Localizator.get_text(MessageEntity.COMMON, "chargeable_period").format(period=period))
    print(Localizator.get_text(MessageEntity.COMMON, "rental_days").format(
        days=DateRangeResolver.format_rental_days(result.rental_days)
    ))
    print(f"{format_currency(result.unit_price)} x {result.quantity} = {format_currency(result.line_total)}")
    print(PricingService.format_discount_hint(result.rental_days))


@safe_service_call(notify=_toast)
async def cart(shop: RentalStorefront, args):
    result = await shop.cart.fetch_cart()
    if result.error is not None:
        raise result.error

    if args.add:
        product = await shop.get_product(args.add)
        _select_dates(shop, args.delivery, args.pickup)
        result = await shop.add_to_cart(product, args.quantity, args.duration)
        if result.error is not None:
            raise result.error
        print(_user_text("cart_item_added"))
    elif args.remove:
        result = await shop.cart.remove_item(args.remove)
        if result.error is not None:
            raise result.error
        print(_user_text("cart_item_removed"))
    elif args.clear:
        result = await shop.cart.clear_cart()
        if result.error is not None:
            raise result.error
        print(_user_text("cart_cleared"))

    if args.coupon:
        applied = await shop.apply_coupon(args.coupon)
        print(_user_text("coupon_applied", amount=format_currency(applied.discount_amount)))

    _print_cart(shop)


@safe_service_call(notify=_toast)
async def coupons(shop: RentalStorefront, args):
    await shop.cart.fetch_cart()
    eligibility = await shop.coupons.list_available(shop.cart.get_total_amount())
    if not eligibility:
        print(_user_text("coupon_none_available"))
    for entry in eligibility:
        status = "OK" if entry.is_applicable else entry.message
        print(f"{entry.coupon.code}  {entry.coupon.discount_type.value} {entry.coupon.discount_value}  {status}")


@safe_service_call(notify=_toast)
async def wishlist(shop: RentalStorefront, args):
    await shop.wishlist.fetch_wishlist()
    if args.add:
        product = await shop.get_product(args.add)
        result = await shop.wishlist.add_item(product)
        if result.error is not None:
            raise result.error
        print(_user_text("wishlist_added"))
    elif args.remove:
        result = await shop.wishlist.remove_item(args.remove)
        if result.error is not None:
            raise result.error
        print(_user_text("wishlist_removed"))

    snapshot = shop.wishlist.snapshot
    if snapshot.is_local_only:
        print(_user_text("wishlist_local_only"))
    if not snapshot.items:
        print(_user_text("wishlist_empty"))
    for product in snapshot.items:
        print(f"{product.id}  {product.name}")


COMMANDS = {
    "products": list_products,
    "quote": quote,
    "cart": cart,
    "coupons": coupons,
    "wishlist": wishlist,
}


async def run_command(args) -> None:
    auth = AuthContextDTO(user_id=args.user_id, token=args.token or config.API_TOKEN)
    async with RentalStorefront(auth=auth) as shop:
        await COMMANDS[args.command](shop, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rental storefront command line client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List products
  python run.py products --category Cameras

  # Price 2 units for Feb 10 → Feb 13
  python run.py quote p1 --quantity 2 --delivery 2026-02-10 --pickup 2026-02-13

  # Add to cart and apply a coupon
  python run.py cart --add p1 --delivery 2026-02-10 --pickup 2026-02-13 --coupon SAVE10
        """
    )
    parser.add_argument("--token", help="API bearer token (default: API_TOKEN)")
    parser.add_argument("--user-id", help="User id, only used in logs")

    def add_rental_arguments(sub):
        sub.add_argument("--quantity", type=int, default=1)
        sub.add_argument("--duration", type=RentalDuration, default=RentalDuration.DAILY,
                         choices=list(RentalDuration))
        sub.add_argument("--delivery", type=datetime.fromisoformat, help="Delivery date (ISO)")
        sub.add_argument("--pickup", type=datetime.fromisoformat, help="Pickup date (ISO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    products_parser = subparsers.add_parser("products", help="List products")
    products_parser.add_argument("--category")

    quote_parser = subparsers.add_parser("quote", help="Price a rental without adding it")
    quote_parser.add_argument("product_id")
    add_rental_arguments(quote_parser)

    cart_parser = subparsers.add_parser("cart", help="Show or change the cart")
    cart_action = cart_parser.add_mutually_exclusive_group()
    cart_action.add_argument("--add", metavar="PRODUCT_ID")
    cart_action.add_argument("--remove", metavar="LINE_ID")
    cart_action.add_argument("--clear", action="store_true")
    cart_parser.add_argument("--coupon", metavar="CODE")
    add_rental_arguments(cart_parser)

    subparsers.add_parser("coupons", help="List coupons for the current cart")

    wishlist_parser = subparsers.add_parser("wishlist", help="Show or change the wishlist")
    wishlist_action = wishlist_parser.add_mutually_exclusive_group()
    wishlist_action.add_argument("--add", metavar="PRODUCT_ID")
    wishlist_action.add_argument("--remove", metavar="PRODUCT_ID")

    return parser


def main():
    args = build_parser().parse_args()
    setup_logging()
    validate_or_exit(config)
    logger.info(f"Running '{args.command}' against {config.API_BASE_URL}")
    asyncio.run(run_command(args))


if __name__ == "__main__":
    main()
