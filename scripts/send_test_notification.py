"""Utility script to publish a notification into the persisted snapshot."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    notify_alert_created,
    notify_delivery_assigned,
    notify_stock_low,
    notify_user_registered,
)
from app.infrastructure.database import initialize_database
from app.infrastructure.notifications import create_notification_publisher

KINDS = ("user", "alert", "delivery", "stock")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the test notification."""

    parser = argparse.ArgumentParser(
        description="Publish a sample notification for the SAKHI dashboard bell.",
    )
    parser.add_argument("kind", choices=KINDS, help="Kind of event to simulate")
    parser.add_argument(
        "--name",
        default="Priya Sharma",
        help="Person the event refers to (default: Priya Sharma)",
    )
    parser.add_argument(
        "--severity",
        default="high",
        choices=("high", "medium", "low"),
        help="Alert severity, only used for 'alert'",
    )
    parser.add_argument(
        "--item",
        default="Sanitary kits",
        help="Inventory item, only used for 'stock'",
    )
    parser.add_argument(
        "--quantity",
        type=int,
        default=3,
        help="Remaining quantity, only used for 'stock'",
    )
    return parser.parse_args()


def main() -> None:
    """Publish one notification using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    publisher = create_notification_publisher()
    publisher.start()
    try:
        if args.kind == "user":
            notification = notify_user_registered(publisher, user_id=None, full_name=args.name)
        elif args.kind == "alert":
            notification = notify_alert_created(
                publisher,
                woman_name=args.name,
                alert_type="Test alert",
                severity=args.severity,
            )
        elif args.kind == "delivery":
            notification = notify_delivery_assigned(publisher, woman_name=args.name)
        else:
            notification = notify_stock_low(
                publisher, item_name=args.item, quantity=args.quantity
            )
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not persist the notification: {exc}") from exc
    finally:
        publisher.close()

    if notification is None:
        print("Stock level is above the threshold; nothing was published.")
        return

    print(
        "Notification published:\n"
        f"  ID: {notification.id}\n"
        f"  Title: {notification.title}\n"
        f"  Priority: {notification.priority}\n"
        f"  Unread: {publisher.get_unread_count()}"
    )


if __name__ == "__main__":
    main()
