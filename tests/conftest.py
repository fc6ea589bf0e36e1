import json
from pathlib import Path
import pytest
from loguru import logger


def write_menu(folder: Path, entries, name: str = ".menu") -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(entries if isinstance(entries, str) else json.dumps(entries), encoding="utf-8")
    return path


@pytest.fixture
def menu_writer():
    return write_menu


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
