from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def _csv(value: str) -> Tuple[str, ...]:
    return tuple(x.strip() for x in value.split(",") if x.strip())


@dataclass(frozen=True)
class Settings:
    # IMPORTANT: keep these names; create_app() and tests use them
    env: str = "dev"
    operations: Tuple[str, ...] = ("create", "update")
    security_headers_enabled: bool = False
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))


def load_settings() -> Settings:
    """
    Reads:
      CRUDPANEL_ENV=dev|prod
      CRUDPANEL_OPERATIONS=create,update
      CRUDPANEL_SECURITY_HEADERS_ENABLED=true/false  (default: on in prod)
      CRUDPANEL_CORS_ORIGINS=https://a,https://b      (default: *)
    """
    env = (os.getenv("CRUDPANEL_ENV") or "dev").strip().lower()

    operations = _csv(os.getenv("CRUDPANEL_OPERATIONS") or "") or ("create", "update")

    sec_raw = os.getenv("CRUDPANEL_SECURITY_HEADERS_ENABLED") or ("true" if env == "prod" else "false")

    cors = _csv(os.getenv("CRUDPANEL_CORS_ORIGINS") or "") or ("*",)

    return Settings(
        env=env,
        operations=operations,
        security_headers_enabled=_flag(sec_raw),
        cors_origins=cors,
    )
