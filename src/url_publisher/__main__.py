from .cli import cli_main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli_main())
