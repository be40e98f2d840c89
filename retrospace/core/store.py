import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from retrospace.core.errors import Malformed

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Durable string store with an explicit lifecycle.
    
    Values are JSON documents stored under well-known keys. Implementations
    only move strings around; decoding lives in the JSON helpers below.
    """
    
    async def open(self) -> None:
        """Acquire the underlying resource."""
    
    async def close(self) -> None:
        """Release the underlying resource."""
    
    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        ...
    
    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        ...
    
    @abstractmethod
    async def delete(self, key: str) -> None:
        ...
    
    # JSON operations
    async def read_json(self, key: str) -> Optional[Any]:
        """Get and parse a JSON document, None when the key is absent."""
        value = await self.read(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError as exc:
            raise Malformed(f"Unreadable JSON under {key!r}: {exc}") from exc
    
    async def write_json(self, key: str, value: Any) -> None:
        """Serialize and store a JSON document."""
        await self.write(key, json.dumps(value))


class FileStore(KeyValueStore):
    """One ``<key>.json`` file per key inside a directory."""
    
    def __init__(self, directory: str):
        self.directory = Path(directory)
    
    async def open(self) -> None:
        await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
    
    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
    
    async def read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self._path(key))
    
    async def write(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self._path(key), value)
    
    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)
    
    @staticmethod
    def _read(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
    
    @staticmethod
    def _write(path: Path, value: str) -> None:
        # Replace atomically so a crash never leaves half a document
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)
