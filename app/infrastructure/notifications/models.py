"""Notification system core models.

Transport-agnostic notification models. Producers describe what to send
and to whom; channels decide which recipients they can reach.

Uses Pydantic BaseModel for:
- Runtime validation of required construction arguments
- Immutability (frozen models) once handed to the service
- Type safety with proper error messages
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CHANNELS = ("email",)


class Notification(BaseModel):
    """A logical message fanned out across one or more channels.

    Recipients are channel-specific identifiers (email addresses, E.164
    phone numbers, push tokens) in one ordered list; each channel picks the
    ones it can handle and silently skips the rest.

    Attributes:
        recipients: Ordered recipient identifiers (required, minimum 1)
        subject: Subject line (email), title (push), ignored (SMS)
        content: Plain text body
        data: Named attributes for templates and push payloads
        channels: Channel names to attempt, in order (default: ["email"])

    Example:
        notification = Notification(
            recipients=["ops@example.com", "+15551234567"],
            subject="Order shipped",
            content="Order 42 left the warehouse",
            channels=["email", "sms"],
            data={"order_id": 42},
        )
    """

    model_config = ConfigDict(frozen=True)

    recipients: List[str] = Field(..., min_length=1)
    subject: str
    content: str
    data: Dict[str, Any] = Field(default_factory=dict)
    channels: List[str] = Field(default_factory=lambda: list(DEFAULT_CHANNELS))

    @field_validator("recipients")
    @classmethod
    def strip_recipients(cls, v: List[str]) -> List[str]:
        """Trim whitespace and drop blank identifiers."""
        cleaned = [r.strip() for r in v if r and r.strip()]
        if not cleaned:
            raise ValueError("Notification requires at least one recipient")
        return cleaned

    @field_validator("channels")
    @classmethod
    def dedupe_channels(cls, v: List[str]) -> List[str]:
        """Remove duplicate channel names, keeping first occurrence order."""
        return list(dict.fromkeys(v))

    @classmethod
    def to(
        cls,
        recipient: str,
        subject: str,
        content: str,
        channels: Optional[Sequence[str]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> "Notification":
        """Build a notification for a single recipient."""
        return cls.to_many([recipient], subject, content, channels, data)

    @classmethod
    def to_many(
        cls,
        recipients: Iterable[str],
        subject: str,
        content: str,
        channels: Optional[Sequence[str]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> "Notification":
        """Build a notification for several recipients."""
        return cls(
            recipients=list(recipients),
            subject=subject,
            content=content,
            channels=list(channels) if channels is not None else list(DEFAULT_CHANNELS),
            data=data or {},
        )


class TemplateNotification(Notification):
    """Notification whose body is rendered from a named template.

    ``subject`` defaults to the template name and ``content`` to an empty
    string. Channels that support templates render ``template_name`` with
    ``data``; the others fall back to ``content``.
    """

    template_name: str = Field(..., min_length=1)
    subject: str = ""
    content: str = ""

    @model_validator(mode="before")
    @classmethod
    def default_subject(cls, values: Any) -> Any:
        if isinstance(values, dict) and not values.get("subject"):
            values = {**values, "subject": values.get("template_name", "")}
        return values


class DeliveryReport(BaseModel):
    """Aggregated outcome of one NotificationService.send() call.

    Attributes:
        success_count: Recipients reached, summed across channels
        failed_count: Channels that failed or were not registered
        errors: Diagnostic messages, in channel order
    """

    success_count: int = 0
    failed_count: int = 0
    errors: List[str] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """True when no channel failed."""
        return self.failed_count == 0

    def record_success(self, reached: int) -> None:
        self.success_count += reached

    def record_failure(self, error: str) -> None:
        self.failed_count += 1
        self.errors.append(error)

    def merge(self, other: "DeliveryReport") -> "DeliveryReport":
        """Fold another report into this one.

        Args:
            other: Report to add; its errors are appended after ours.

        Returns:
            This report, for chaining.
        """
        self.success_count += other.success_count
        self.failed_count += other.failed_count
        self.errors.extend(other.errors)
        return self
