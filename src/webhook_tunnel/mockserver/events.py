"""Sample webhook notifications replayed by the mock stream server."""

from typing import Any, Dict, List


def _grant_event(event_type: str, time: int, **obj: Any) -> Dict[str, Any]:
    return {
        "specversion": "1.0",
        "type": event_type,
        "source": "/nylas/system",
        "id": "mock-id",
        "time": time,
        "data": {
            "application_id": "NYLAS_APPLICATION_ID",
            "object": {
                "grant_id": "NYLAS_GRANT_ID",
                "integration_id": "NYLAS_INTEGRATION_ID",
                **obj,
            },
        },
    }


SAMPLE_EVENTS: List[Dict[str, Any]] = [
    _grant_event(
        "grant.created",
        1234567890,
        code=25012,
        login_id="mock-login-id",
        provider="google",
    ),
    _grant_event(
        "grant.updated",
        123456789,
        code=25014,
        provider="microsoft",
        reauthentication_flag=False,
    ),
    _grant_event("grant.deleted", 1234567890, code=25013, provider="google"),
    {
        "specversion": "1.0",
        "type": "message.created",
        "source": "/google/emails/realtime",
        "id": "<WEBHOOK_ID>",
        "time": 1723821985,
        "webhook_delivery_attempt": 1,
        "data": {
            "application_id": "<NYLAS_APPLICATION_ID>",
            "object": {
                "attachments": {
                    "content_disposition": 'attachment; filename="image.jpg"',
                    "content_id": "<CID>",
                    "content_type": 'image/jpeg; name="image.jpg"',
                    "filename": "image.jpg",
                    "grant_id": "<NYLAS_GRANT_ID>",
                    "id": "<ATTACHMENT_ID>",
                    "is_inline": False,
                    "size": 4860136,
                },
                "bcc": {"email": "leyah@example.com"},
                "body": '<div dir="ltr">Test with attachments</div>\r\n',
                "cc": {"email": "kaveh@example.com"},
                "date": 1723821981,
                "folders": ["SENT"],
                "from": {"email": "swag@example.com", "name": "Nylas Swag"},
                "grant_id": "<NYLAS_GRANT_ID>",
                "id": "<MESSAGE_ID>",
                "metadata": {"key1": "all-meetings", "key2": "on-site"},
                "object": "message",
                "reply_to": {},
                "snippet": "This message has an attachment. yippee!",
                "starred": False,
                "subject": "Let's send an attachment",
                "thread_id": "<THREAD_ID>",
                "to": {"email": "nyla@example.com"},
                "unread": False,
            },
        },
    },
]
