import sys
from importlib.metadata import PackageNotFoundError, version

from botocore.exceptions import BotoCoreError, ClientError

from .cli import build_options, build_parser, dispatch, settings_from_args
from .core.config import configure_logging
from .core.errors import EcskError, WizardCancelled
from .core.utils import print_error

try:
    __version__ = version("ecsk")
except PackageNotFoundError:
    __version__ = "dev"

EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Interactive Docker-like CLI for Amazon ECS."""
    parser = build_parser(__version__)
    args = parser.parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.debug)

    try:
        options = build_options(args)
        dispatch(args.subcommand, settings, options)
    except WizardCancelled as e:
        print_error(str(e))
        return EXIT_ERROR
    except (EcskError, ClientError, BotoCoreError, FileNotFoundError) as e:
        print_error(str(e))
        return EXIT_ERROR
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return EXIT_INTERRUPTED
    return 0


if __name__ == "__main__":
    sys.exit(main())
