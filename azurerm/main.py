"""
AzureRM provider - CLI Entry Point.

Runs a single resource handler from the command line. Configurations and
states are JSON files holding the flat attribute map of one resource.
"""

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from azure.core.exceptions import AzureError, DeserializationError, SerializationError

from azurerm.core.config_loader import load_json_file
from azurerm.core.exceptions import ProviderError
from azurerm.core.registry import ResourceRegistry
from azurerm.logger import logger, print_stack_trace
from azurerm.provider import Provider
import azurerm.runner as runner


# ==========================================
# Command Helpers
# ==========================================

def help_menu():
    print("""
Available commands:

Catalogue commands:
  list                                  - Lists every resource and data source type.
  schema <type>                         - Prints the attribute schema of a resource or data source.
  validate <type> <config.json>         - Validates a configuration without calling Azure.

Resource commands:
  apply <type> <config.json> [state.json]
                                        - Creates the resource, or updates it when a state is given.
  read <type> <state.json>              - Refreshes the state of an existing resource.
  destroy <type> <state.json>           - Deletes the resource.
  import <type> <id>                    - Imports an existing Azure object by resource ID.

Data source commands:
  data <type> <config.json>             - Reads a data source.

Other commands:
  help                                  - Show this help menu.

Configuration:
  Credentials are read from config_credentials.json (or ARM_CONFIG_FILE) and
  ARM_* environment variables; environment variables win.
""")


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, sort_keys=True))


def _load(path: str) -> dict:
    return load_json_file(Path(path))


def _lookup(provider: Provider, type_name: str):
    if ResourceRegistry.is_registered(type_name, data_source=True) and not ResourceRegistry.is_registered(type_name):
        return provider.data_source(type_name)
    return provider.resource(type_name)


def _require(args: List[str], count: int, usage: str) -> bool:
    if len(args) < count:
        print(f"Usage: {usage}")
        return False
    return True


# ==========================================
# Main
# ==========================================

def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        help_menu()
        return 0

    command = argv[0]
    args = argv[1:]
    provider = Provider()

    try:
        if command == "help":
            help_menu()

        elif command == "list":
            _print_json({
                "resources": ResourceRegistry.list_resources(),
                "data_sources": ResourceRegistry.list_resources(data_source=True),
            })

        elif command == "schema":
            if not _require(args, 1, "schema <type>"):
                return 2
            _print_json(_lookup(provider, args[0]).to_dict())

        elif command == "validate":
            if not _require(args, 2, "validate <type> <config.json>"):
                return 2
            errors = _lookup(provider, args[0]).validate(_load(args[1]))
            if errors:
                for error in errors:
                    logger.error(error)
                return 1
            logger.info("✓ Configuration is valid")

        elif command == "apply":
            if not _require(args, 2, "apply <type> <config.json> [state.json]"):
                return 2
            state = _load(args[2]) if len(args) > 2 else None
            meta = provider.configure()
            _print_json(runner.apply(provider.resource(args[0]), _load(args[1]), meta, state=state))

        elif command == "read":
            if not _require(args, 2, "read <type> <state.json>"):
                return 2
            meta = provider.configure()
            _print_json(runner.refresh(provider.resource(args[0]), _load(args[1]), meta))

        elif command == "destroy":
            if not _require(args, 2, "destroy <type> <state.json>"):
                return 2
            meta = provider.configure()
            runner.destroy(provider.resource(args[0]), _load(args[1]), meta)
            logger.info("✓ Destroy complete")

        elif command == "import":
            if not _require(args, 2, "import <type> <id>"):
                return 2
            meta = provider.configure()
            _print_json(runner.import_resource(provider.resource(args[0]), args[1], meta))

        elif command == "data":
            if not _require(args, 2, "data <type> <config.json>"):
                return 2
            meta = provider.configure()
            _print_json(runner.read_data_source(provider.data_source(args[0]), _load(args[1]), meta))

        else:
            print(f"Unknown command: {command}. Type 'help' for a list of commands.")
            return 2

    except ProviderError as e:
        logger.error(e)
        print_stack_trace()
        return 1
    except (AzureError, SerializationError, DeserializationError) as e:
        logger.error(f"Azure SDK error: {e}")
        print_stack_trace()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
