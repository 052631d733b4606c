"""Operating system trust store integration.

Hyperview instances are often fronted by proxies that re-sign TLS with a
corporate root. ``truststore`` lets ``requests`` verify against the OS store
instead of the bundled certifi file.

Environment Variables:
    HVCLI_DISABLE_OS_TRUST=1  -> Skip injection entirely (use certifi)
    HVCLI_FORCE_OS_TRUST=1    -> Raise on any injection failure
"""

import os
import sys

import truststore

OS_TRUST_INJECTED: bool = False
OS_TRUST_REASON: str = "not-attempted"


def inject_os_trust() -> None:
    """Route SSL verification through the system certificate store.

    Silent on success. A failure falls back to certifi with a one-line notice
    unless ``HVCLI_FORCE_OS_TRUST`` is set.
    """
    global OS_TRUST_INJECTED, OS_TRUST_REASON
    if os.environ.get("HVCLI_DISABLE_OS_TRUST") == "1":
        OS_TRUST_INJECTED = False
        OS_TRUST_REASON = "disabled-env"
        return

    try:
        truststore.inject_into_ssl()
    except Exception as exc:  # noqa: BLE001
        if os.environ.get("HVCLI_FORCE_OS_TRUST") == "1":
            raise
        sys.stderr.write(
            f"[hvcli] Info: system trust store injection skipped: "
            f"{exc.__class__.__name__}: {exc}.\n"
        )
        OS_TRUST_INJECTED = False
        OS_TRUST_REASON = f"error:{exc.__class__.__name__}"
        return

    OS_TRUST_INJECTED = True
    OS_TRUST_REASON = "injected:ssl"


def describe_ca_source() -> str:
    """Describe where certificate verification roots come from."""
    if OS_TRUST_INJECTED:
        return f"CA Source: system (reason={OS_TRUST_REASON})"
    verify_env = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")
    if verify_env:
        return f"CA Source: custom-pem ({verify_env})"
    return f"CA Source: certifi (reason={OS_TRUST_REASON})"
