"""
Entry point for the Undercover host server.
"""

import argparse

from dotenv import load_dotenv

from undercover.config.config_loader import load_config
from undercover.web import GameServer


def main():
    """Parse arguments, load configuration and serve."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Run the Undercover party game host server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                               # Use default config
  python main.py --config config.example.yaml  # Use a YAML config
  python main.py --port 4000 --seed 42         # Override port, reproducible draws
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind. Overrides config file setting."
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port to listen on. Overrides config file setting."
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for reproducible role assignment and word draws"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.seed is not None:
        config.random_seed = args.seed

    print("Undercover Host Server")
    print("=" * 60)
    if args.config:
        print(f"Using config: {args.config}")
    if config.random_seed is not None:
        print(f"Random seed: {config.random_seed}")
    print(f"Custom words file: {config.custom_words_path}")
    print("=" * 60)

    server = GameServer(config=config)
    server.start()


if __name__ == "__main__":
    main()
