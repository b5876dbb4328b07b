import argparse

from dotenv import load_dotenv

from infinite_runway.config import load_settings
from infinite_runway.utils.logging import configure_logging
from infinite_runway.web.app import create_app


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Run the Infinite Runway web app (development server)")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    create_app(settings).run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
