"""Static path-prefix to upstream mapping."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    """A single prefix -> upstream base URL entry."""

    prefix: str
    upstream: str


# Declaration order matters: the first matching prefix wins.
ROUTE_TABLE: tuple[Route, ...] = (
    Route("/mistral", "https://api.mistral.ai"),
    Route("/discord", "https://discord.com/api"),
    Route("/telegram", "https://api.telegram.org"),
    Route("/openai", "https://api.openai.com"),
    Route("/claude", "https://api.anthropic.com"),
    Route("/gemini", "https://generativelanguage.googleapis.com"),
    Route("/meta", "https://www.meta.ai/api"),
    Route("/groq", "https://api.groq.com/openai"),
    Route("/xai", "https://api.x.ai"),
    Route("/cohere", "https://api.cohere.ai"),
    Route("/huggingface", "https://api-inference.huggingface.co"),
    Route("/together", "https://api.together.xyz"),
    Route("/novita", "https://api.novita.ai"),
    Route("/portkey", "https://api.portkey.ai"),
    Route("/fireworks", "https://api.fireworks.ai"),
    Route("/openrouter", "https://openrouter.ai/api"),
)
