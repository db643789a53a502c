import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .backends import BACKENDS, get_backend
from .clients import HttpPromptManagementClient, JsonlPromptRegistry
from .config import ClientSettings, load_keys_file
from .domain import ExecuteOptions
from .errors import ClientError, ManagementServiceError
from .orchestrator import ExecutionOrchestrator

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def parse_variables(pairs: List[str]) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid variable '{pair}', expected KEY=VALUE")
        variables[key] = value
    return variables


def _configure_logging(level_name: str, log_file: str) -> None:
    log_level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path))
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prompt-executor")
    parser.add_argument("command", choices=["run"])
    parser.add_argument("prompt_name")
    parser.add_argument("--var", action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--backend", choices=sorted(BACKENDS), default="gpt")
    parser.add_argument("--auto_parse_json", action="store_true")
    parser.add_argument("--registry_dir", default="")
    parser.add_argument("--log_level", default="INFO")
    parser.add_argument("--log_file", default="")
    parser.add_argument("--keys_file", default="")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level, args.log_file)
    logger = logging.getLogger("prompt_executor")
    logger.info(f"command={args.command} prompt={args.prompt_name} backend={args.backend}")

    try:
        variables = parse_variables(args.var)
    except ValueError as e:
        parser.error(str(e))

    if args.keys_file:
        try:
            load_keys_file(args.keys_file)
            logger.info("keys_file_loaded")
        except (OSError, ValueError) as e:
            logger.warning(f"keys_file_error {e}")

    if args.registry_dir:
        client = JsonlPromptRegistry(args.registry_dir)
    else:
        try:
            client = HttpPromptManagementClient(ClientSettings.from_env())
        except ValueError as e:
            logger.error(f"client_config_error {e}")
            return 1

    orchestrator = ExecutionOrchestrator(client, get_backend(args.backend))
    try:
        result = orchestrator.run(
            args.prompt_name,
            variables,
            ExecuteOptions(auto_parse_json=args.auto_parse_json),
        )
    except (ClientError, ManagementServiceError) as e:
        logger.error(f"run_failed prompt={args.prompt_name} error={e}")
        return 1
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
