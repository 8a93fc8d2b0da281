"""Detect whether the process runs on Google Compute Engine.

:func:`is_running_on_compute_engine` answers with a plain boolean, in
this order:

1. ``GOOGLE_RUNNING_ON_GCE_CHECK_OVERRIDE`` -- when set, ``"1"`` means
   true and any other value means false. Tests use this to keep the
   resolver hermetic.
2. On Linux, the DMI product name. Compute Engine VMs report
   ``Google`` or ``Google Compute Engine``.
3. An HTTP ping of the metadata server with a bounded timeout. Only a
   response carrying ``Metadata-Flavor: Google`` counts.

An inconclusive ping (timeout, DNS failure, refused connection) is logged
and treated as false; it is never raised to the caller.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import httpx

from adcred.config import load_probe_settings
from adcred.environment import GCE_CHECK_OVERRIDE_ENV_VAR, Environment
from adcred.exceptions import MetadataProbeError
from adcred.models import ProbeSettings

logger = logging.getLogger(__name__)

METADATA_FLAVOR_HEADER = "Metadata-Flavor"
METADATA_FLAVOR_VALUE = "Google"

_DMI_PRODUCT_NAME = Path("/sys/class/dmi/id/product_name")


def _is_linux() -> bool:
    return platform.system() == "Linux"


def detect_gce_residency_linux(product_name_file: Path = _DMI_PRODUCT_NAME) -> bool:
    """Return True if the Linux DMI product name identifies a Google VM."""
    try:
        product_name = product_name_file.read_text(encoding="utf-8").strip()
    except OSError:
        return False
    return product_name.startswith("Google")


def ping_metadata_server(settings: ProbeSettings) -> bool:
    """Send a single request to the metadata server root.

    Args:
        settings: Host and timeout to use.

    Returns:
        ``True`` if the server answered as a Google metadata server.

    Raises:
        MetadataProbeError: If the request could not complete or the host
            does not form a valid URL.
    """
    url = f"http://{settings.metadata_host}/"
    try:
        response = httpx.get(
            url,
            headers={METADATA_FLAVOR_HEADER: METADATA_FLAVOR_VALUE},
            timeout=settings.timeout,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise MetadataProbeError(f"Metadata server ping to {url} failed: {exc}") from exc
    return response.headers.get(METADATA_FLAVOR_HEADER) == METADATA_FLAVOR_VALUE


def is_running_on_compute_engine(
    env: Environment | None = None,
    settings: ProbeSettings | None = None,
) -> bool:
    """Check whether the process runs on Google Compute Engine.

    Args:
        env: Environment to read the override from; defaults to the
            process environment.
        settings: Probe settings; defaults to
            :func:`~adcred.config.load_probe_settings`.

    Returns:
        ``True`` when running on Compute Engine (or forced by the override).
    """
    env = env or Environment()
    override = env.lookup(GCE_CHECK_OVERRIDE_ENV_VAR)
    if override is not None:
        logger.debug("%s=%r overrides the metadata probe", GCE_CHECK_OVERRIDE_ENV_VAR, override)
        return override == "1"

    if _is_linux() and detect_gce_residency_linux():
        return True

    settings = settings or load_probe_settings(env)
    try:
        return ping_metadata_server(settings)
    except MetadataProbeError as exc:
        logger.debug("Treating inconclusive metadata probe as off-platform: %s", exc)
        return False
