#!/usr/bin/env python3
"""
Command-line interface for the notification pipeline.

Usage:
    uv run python cli.py [command] [options]

Commands:
    demo        Run demo scenarios
    send        Process a single notification
    test        Run the test suite
    serve       Start the API server

Examples:
    uv run python cli.py demo all-channels
    uv run python cli.py send email user@example.com
    uv run python cli.py send sms 5555555555 --strategies-from email
    uv run python cli.py serve
"""

import argparse
import subprocess
import sys
from typing import Optional

DEMO_SCENARIOS = ["all-channels", "hybrid", "singleton", "rejected", "all"]


def run_demo(scenario: str) -> None:
    """Run a demo scenario."""
    from notifications import demo

    if scenario == "all-channels":
        demo.run_all_channels_demo()
    elif scenario == "hybrid":
        demo.run_hybrid_demo()
    elif scenario == "singleton":
        demo.run_singleton_demo()
    elif scenario == "rejected":
        demo.run_rejected_demo()
    elif scenario == "all":
        demo.run_singleton_demo()
        demo.run_all_channels_demo()
        demo.run_rejected_demo()
        demo.run_hybrid_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        sys.exit(1)


def run_send(channel: str, target: str, strategies_from: Optional[str]) -> int:
    """Process one notification and return a process exit code."""
    import logging

    from notifications.exceptions import UnsupportedChannelError
    from notifications.factory import ChannelFactory
    from notifications.templates import ProcessingState

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
        datefmt="%H:%M:%S",
    )

    factory = ChannelFactory()
    try:
        notification = factory.create(channel, target)
        if strategies_from:
            notification.use_strategies(factory.create_strategies(strategies_from))
    except UnsupportedChannelError as e:
        print(str(e))
        print("Valid channels: " + ", ".join(c.value for c in factory.supported_channels()))
        return 2

    state = notification.process_notification()
    print(f"{notification.notification_type} notification to {target}: {state.value}")
    return 0 if state == ProcessingState.COMPLETED else 1


def run_tests(args: list[str]) -> None:
    """Run the test suite."""
    cmd = ["uv", "run", "pytest"] + args
    subprocess.run(cmd)


def run_server(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    cmd = ["uv", "run", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    subprocess.run(cmd)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Notification Pipeline CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo all-channels
  %(prog)s demo hybrid
  %(prog)s send email user@example.com
  %(prog)s send sms 5555555555 --strategies-from email
  %(prog)s test -v
  %(prog)s serve --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo scenarios")
    demo_parser.add_argument(
        "scenario",
        choices=DEMO_SCENARIOS,
        help="Which scenario to run",
    )

    # Send command
    send_parser = subparsers.add_parser("send", help="Process a single notification")
    send_parser.add_argument("channel", help="email, sms, push or whatsapp")
    send_parser.add_argument("target", help="Email address, phone number or device token")
    send_parser.add_argument(
        "--strategies-from",
        default=None,
        help="Use another channel's send/log/save strategies",
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "demo":
        run_demo(args.scenario)
    elif args.command == "send":
        sys.exit(run_send(args.channel, args.target, args.strategies_from))
    elif args.command == "test":
        run_tests(args.pytest_args)
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
