"""Canned reply texts."""

HELP_REPLY = (
    "⚡ You have the right to remain silent. Don't sign any document without "
    "a lawyer. Ask me a specific question for more info."
)

LAWYER_REPLY = "Nearest legal aid: +977-98XXXXXXX (Kathmandu)."


def incident_recorded_reply(attachment_count: int) -> str:
    return (
        f"✅ Your incident has been recorded with {attachment_count} "
        f"attachment(s). Stay safe!"
    )
