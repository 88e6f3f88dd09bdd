"""Incident email notifier backed by GC Notify."""

from typing import Sequence

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import IncidentDetected
from infrastructure.notifications.rendering import build_incident_email_personalisation
from infrastructure.operations import OperationResult
from integrations.notify.client import NotifyClient

logger = get_module_logger()


class NotifyEmailNotifier:
    """Sends the incident template to every tenant recipient.

    Recipients are processed in order and the first failed send is
    returned; recipients after it are not attempted.
    """

    def __init__(
        self,
        client: NotifyClient,
        template_id: str,
        recipients: Sequence[str],
    ):
        self._client = client
        self._template_id = template_id
        self._recipients = tuple(recipients)

    @property
    def template_id(self) -> str:
        return self._template_id

    @property
    def recipients(self) -> Sequence[str]:
        return self._recipients

    def notify(self, event: IncidentDetected, routing_url: str) -> OperationResult:
        personalisation = build_incident_email_personalisation(event, routing_url)
        sent_ids = []

        for recipient in self._recipients:
            result = self._client.send_email(
                email_address=recipient,
                template_id=self._template_id,
                personalisation=personalisation,
                reference=event.incident_id or None,
            )
            if not result.is_success:
                return result
            sent_ids.append((result.data or {}).get("id"))

        logger.debug(
            "incident_emails_sent",
            release_name=event.release_name,
            recipients=len(self._recipients),
        )
        return OperationResult.success(
            data={"notification_ids": sent_ids},
            message=f"Sent incident email to {len(sent_ids)} recipient(s)",
        )
