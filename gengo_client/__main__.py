"""Package entry point for ``python -m gengo_client``.

Delegates straight to the CLI's main().
"""

from gengo_client.cli import main

if __name__ == "__main__":
    main()
