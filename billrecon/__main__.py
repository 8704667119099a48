from billrecon.cli.app import main_menu
from billrecon.logging import configure_logging


def main() -> None:
    configure_logging()
    main_menu()


if __name__ == "__main__":
    main()
