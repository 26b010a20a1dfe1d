from .notification import NotificationRelay, SMTPNotificationRelay

__all__ = ["NotificationRelay", "SMTPNotificationRelay"]
