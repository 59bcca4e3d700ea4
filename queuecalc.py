"""
QueueCalc
Main application entry point
"""
import argparse
import logging
import socket
import sys

import config
from calculator import Calculator
from symbols import parse_keys


def get_local_ip():
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't even have to be reachable
        s.connect(('10.255.255.255', 1))
        IP = s.getsockname()[0]
        s.close()
    except OSError:
        IP = '127.0.0.1'
    return IP


def serve(host, port, debug=False):
    """Start the web portal"""
    from api import app

    ip = get_local_ip()
    print("=" * 60)
    print(f"{config.APP_NAME} {config.VERSION} WEB CALCULATOR IS LIVE")
    print(f"Access on this PC:    http://localhost:{port}")
    if host == '0.0.0.0':
        print(f"Access on your Phone: http://{ip}:{port}")
    print("=" * 60)

    app.run(host=host, port=port, debug=debug)


def run_keys(keys, out=None):
    """Feed a key stream to a fresh calculator and print every render"""
    symbols = parse_keys(keys)
    out = out or sys.stdout
    calculator = Calculator(on_display_changed=lambda text: print(text, file=out))
    calculator.deliver_all(symbols)
    return calculator.display


def build_parser():
    parser = argparse.ArgumentParser(prog="queuecalc", description=f"{config.APP_NAME} left-to-right calculator")
    parser.add_argument("--log-level", default=None, help="Logging level, overrides QUEUECALC_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Start the web calculator (default)")
    serve_parser.add_argument("--host", default=config.WEB_HOST)
    serve_parser.add_argument("--port", type=int, default=config.WEB_PORT)
    serve_parser.add_argument("--debug", action="store_true")

    keys_parser = subparsers.add_parser("keys", help="Evaluate a key stream such as '2+3='")
    keys_parser.add_argument("keys")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = config.LOG_LEVEL
    if args.log_level:
        level = getattr(logging, args.log_level.upper(), config.LOG_LEVEL)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)

    if args.command == "keys":
        try:
            run_keys(args.keys)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return 0

    if args.command is None:
        serve(config.WEB_HOST, config.WEB_PORT)
    else:
        serve(args.host, args.port, args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
