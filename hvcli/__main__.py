"""Entry point for the Hyperview CLI application.

Performs system trust store injection (via truststore) before loading the main CLI.
Environment controls:
    HVCLI_DISABLE_OS_TRUST=1  -> skip injection
    HVCLI_FORCE_OS_TRUST=1    -> raise if injection fails
"""

from hvcli.ssl_trust import inject_os_trust  # noqa: E402,I100,I202

# Inject before the CLI imports requests-based modules
inject_os_trust()

from hvcli.main import cli  # noqa: E402,I100,I202

if __name__ == "__main__":
    cli()
