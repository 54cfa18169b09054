from __future__ import annotations
from abc import ABC, abstractmethod
from schema_studio.model import Tables

class SchemaParser(ABC):
    @abstractmethod
    def can_parse(self, text: str) -> bool: ...
    @abstractmethod
    def parse(self, text: str) -> Tables: ...
