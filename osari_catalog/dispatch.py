"""Contact message dispatch through the EmailJS REST API."""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

from .constants import DEFAULT_EMAILJS_URL


class DispatchFailed(RuntimeError):
    """Raised when a contact message could not be delivered."""


@dataclass(slots=True)
class EmailJSClient:
    service_id: str
    template_id: str
    public_key: str
    endpoint: str = DEFAULT_EMAILJS_URL
    timeout: int = 30
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def send(self, sender_name: str, sender_email: str, message: str) -> None:
        """Send one message. No retry is attempted on failure."""

        if not (self.service_id and self.template_id and self.public_key):
            raise DispatchFailed("EmailJS credentials are not configured.")

        payload = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": {
                "from_name": sender_name,
                "from_email": sender_email,
                "message": message,
            },
        }
        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DispatchFailed(f"Sending message failed: {exc}") from exc
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise DispatchFailed(f"Sending message failed: {response.text or exc}") from exc
