"""Fedora repository configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_float_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_FEDORA_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class FedoraConfig:
    """Connection values for the Fedora 3 REST API."""

    base_url: str
    username: str
    password: str = field(repr=False)
    resilience: ResilienceConfig

    @property
    def auth(self) -> tuple[str, str]:
        return (self.username, self.password)


def get_fedora_config(*, resilience: ResilienceConfig | None = None) -> FedoraConfig:
    values = require_env_vars(("FEDORA_URL", "FEDORA_USERNAME", "FEDORA_PASSWORD"))
    base_url = values["FEDORA_URL"]
    if not base_url.endswith("/"):
        base_url += "/"
    timeout = optional_float_env_var("FEDORA_TIMEOUT_SECONDS", DEFAULT_FEDORA_TIMEOUT_SECONDS)

    return FedoraConfig(
        base_url=base_url,
        username=values["FEDORA_USERNAME"],
        password=values["FEDORA_PASSWORD"],
        resilience=resilience
        or ResilienceConfig(
            name="fedora",
            base_url=base_url,
            timeout_seconds=timeout,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
        ),
    )
