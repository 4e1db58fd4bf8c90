"""Header construction for upstream requests."""

from collections.abc import Mapping

from core.protocols import RequestLogger

ALLOWED_HEADERS = ("accept", "content-type", "authorization", "x-goog-api-key")

# Value prefixes of provider API keys (OpenAI/Anthropic, Google, Groq, xAI, Hugging Face)
SECRET_PREFIXES = ("sk-", "AIza", "gsk_", "xai-", "hf_")


def mask_secret(value: str) -> str:
    """Hide values that look like API keys before they reach the logs."""
    credential = value
    if value[:7].lower() == "bearer ":
        credential = value[7:].lstrip()
    if value.startswith(SECRET_PREFIXES) or credential.startswith(SECRET_PREFIXES):
        return "***"
    return value


class HeaderBuilder:
    """Build the allow-listed header set sent to an upstream."""

    def __init__(self, logger: RequestLogger | None = None):
        self._logger = logger

    def build_upstream_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        """Copy allow-listed headers (original casing), then User-Agent if present."""
        upstream: dict[str, str] = {}
        seen: dict[str, str] = {}
        user_agent: str | None = None

        for key, value in headers.items():
            key_lower = key.lower()
            if key_lower == "user-agent":
                user_agent = value
            if key_lower not in ALLOWED_HEADERS:
                continue
            if key_lower in seen:
                name = seen[key_lower]
                upstream[name] = f"{upstream[name]}, {value}"
            else:
                seen[key_lower] = key
                upstream[key] = value

        for key, value in upstream.items():
            self._log(key, value)

        if user_agent is not None:
            upstream["User-Agent"] = user_agent
            self._log("User-Agent", user_agent)

        return upstream

    def _log(self, name: str, value: str) -> None:
        if self._logger:
            self._logger.log_header(name, mask_secret(value))
