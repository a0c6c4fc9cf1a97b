from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MatchNotification(BaseModel):
    """Payload sent to the messaging gateway for a strong top match."""
    candidate_id: str
    job_id: str
    score: int = Field(ge=0, le=100)
    job_title: str = ""
    facility_name: str = ""

    @property
    def dedup_key(self) -> str:
        return f"{self.candidate_id}:{self.job_id}"


class NotificationMessageBuilder:
    @staticmethod
    def build_subject(notification: MatchNotification) -> str:
        """Build the one-line subject."""
        title = notification.job_title or "A new job"
        if notification.facility_name:
            return f"{title} at {notification.facility_name} is a {notification.score}% match"
        return f"{title} is a {notification.score}% match"

    @staticmethod
    def build_body(notification: MatchNotification, base_url: Optional[str] = None) -> str:
        """Build the plain-text body."""
        lines = [
            "We found a strong job match for your profile.",
            "",
            f"Job: {notification.job_title or 'Untitled'}",
        ]
        if notification.facility_name:
            lines.append(f"Facility: {notification.facility_name}")
        lines.append(f"Match score: {notification.score}%")
        if base_url:
            lines.append("")
            lines.append(f"View the job: {base_url.rstrip('/')}/jobs/{notification.job_id}")
        return "\n".join(lines)

    @staticmethod
    def build_event_payload(notification: MatchNotification) -> Dict[str, Any]:
        """Payload shape used by event-trigger APIs (Novu workflow variables)."""
        return {
            "score": notification.score,
            "jobTitle": notification.job_title,
            "facility": notification.facility_name,
            "jobId": notification.job_id,
        }
