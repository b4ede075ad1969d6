#!/usr/bin/env python3
"""Main entry point for Prizm Client."""

import asyncio
import json
import logging
import sys
from pathlib import Path

# Add the project root to the path before imports
if not getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(__file__).parent
    sys.path.insert(0, str(PROJECT_ROOT))

from prizm_client.address import build_server_url
from prizm_client.commands import ClientCommands
from prizm_client.constants import APP_NAME, DEFAULT_LOG_LEVEL
from prizm_client.errors import PersistError, PrizmClientError

logger = logging.getLogger(__name__)

USAGE = """Usage: prizm-client <command> [args]

Commands:
  config                          Show the current configuration
  test [server_url]               Check that the server is healthy
  register <server_url> [name] [scope ...]
                                  Register this client and save the api key
  dashboard [server_url]          Open the server dashboard in a browser
  version                         Show the application version
"""


class PrizmClientShell:
    """Command-line shell over the client commands."""

    def __init__(self, commands: ClientCommands | None = None):
        self.commands = commands if commands is not None else ClientCommands()

    def _saved_server_url(self) -> str:
        """Build the server URL from the saved configuration."""
        config = self.commands.load_config()
        return build_server_url(config.server.host, config.server.port)

    async def run(self, argv: list[str]) -> int:
        """Run a single command. Returns the process exit code."""
        if not argv:
            print(USAGE)
            return 1

        command, args = argv[0], argv[1:]

        try:
            if command == 'config':
                config = self.commands.load_config()
                print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
            elif command == 'test':
                server_url = args[0] if args else self._saved_server_url()
                if await self.commands.test_connection(server_url):
                    print(f"Server at {server_url} is healthy")
                else:
                    print(f"Server at {server_url} is reachable but not healthy")
                    return 1
            elif command == 'register':
                if not args:
                    print(USAGE)
                    return 1
                await self._register(args)
            elif command == 'dashboard':
                server_url = args[0] if args else self._saved_server_url()
                self.commands.open_dashboard(server_url)
            elif command == 'version':
                print(f"{APP_NAME} {self.commands.get_app_version()}")
            else:
                print(f"Unknown command: {command}")
                print(USAGE)
                return 1
        except PersistError as e:
            logger.error(f"Registration not saved: {e}")
            print(f"Issued api key (not saved): {e.api_key}")
            return 1
        except PrizmClientError as e:
            logger.error(f"Command '{command}' failed: {e}")
            return 1

        return 0

    async def _register(self, args: list[str]) -> None:
        server_url = args[0]
        config = self.commands.load_config()
        name = args[1] if len(args) > 1 else config.client.name
        scopes = args[2:] if len(args) > 2 else config.client.requested_scopes

        logger.info(f"Registering '{name}' with {server_url}...")
        await self.commands.register_client(name, server_url, scopes)
        print(f"Registered. Api key saved to {self.commands.config_store.path}")


def main():
    """Main entry point."""
    # Configure logging
    logging.basicConfig(
        level=getattr(logging, DEFAULT_LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    shell = PrizmClientShell()
    try:
        exit_code = asyncio.run(shell.run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
