"""Endpoint host resolution for the Lex V2 runtime."""

import re

from lexruntime.errors import InvalidRegionError

SERVICE_SUBDOMAIN = "runtime-v2-lex"
DEFAULT_BASE_DOMAIN = "amazonaws.com"
CHINA_BASE_DOMAIN = "amazonaws.com.cn"

_DNS_LABEL = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")


def resolve_host(region: str) -> str:
    """Map a region name to the runtime's fully-qualified endpoint host."""
    if not isinstance(region, str) or not _DNS_LABEL.fullmatch(region):
        raise InvalidRegionError(region)
    base_domain = CHINA_BASE_DOMAIN if region.startswith("cn-") else DEFAULT_BASE_DOMAIN
    return f"{SERVICE_SUBDOMAIN}.{region}.{base_domain}"
