"""Caching model options understood by the bundled cache engines."""

from typing import Mapping, Optional

from ....config.settings import EvictionPolicy
from ....core.exceptions import CacheConfigurationError

TIME_TO_LIVE_PROPERTY = "timeToLive"
MAX_ELEMENTS_PROPERTY = "maxElements"
EVICTION_POLICY_PROPERTY = "evictionPolicy"


def parse_int_option(model_id: str,
                     properties: Mapping[str, str],
                     key: str,
                     minimum: int) -> Optional[int]:
    """Parse an optional integer option, None when absent.
    
    Raises:
        CacheConfigurationError: If the value is not an integer >= minimum
    """
    raw = properties.get(key)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or value < minimum:
        raise CacheConfigurationError(
            f"Property {key} of caching model '{model_id}' must be an integer >= {minimum}, got {raw!r}",
            property_name=key,
            properties=properties
        )
    return value


def parse_eviction_policy(model_id: str, properties: Mapping[str, str]) -> Optional[EvictionPolicy]:
    """Parse the optional eviction policy option, None when absent."""
    raw = properties.get(EVICTION_POLICY_PROPERTY)
    if raw is None:
        return None
    try:
        return EvictionPolicy(raw.strip().lower())
    except ValueError:
        raise CacheConfigurationError(
            f"Property {EVICTION_POLICY_PROPERTY} of caching model '{model_id}' must be one of "
            f"{[p.value for p in EvictionPolicy]}, got {raw!r}",
            property_name=EVICTION_POLICY_PROPERTY,
            properties=properties
        ) from None


def validate_caching_options(model_id: str, properties: Mapping[str, str]) -> None:
    """Check engine options of a caching model at registration time."""
    parse_int_option(model_id, properties, TIME_TO_LIVE_PROPERTY, 0)
    parse_int_option(model_id, properties, MAX_ELEMENTS_PROPERTY, 1)
    parse_eviction_policy(model_id, properties)
