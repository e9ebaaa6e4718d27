"""
Notifications app for mobile/web push.

This app provides:
- DeviceToken model for the push targets of each user
- NotificationService for token registration and chat push fan-out
- Celery task that pushes new chat messages to offline recipients
- REST endpoints to register and unregister device tokens

Usage:
    from notifications.services import NotificationService

    result = NotificationService.register_device_token(user, token, "ios")
    if result.success:
        device_token = result.data
"""
