"""Task extraction from document text."""
from .models import TaskCounts, TaskLine
from .parser import parse_tasks

__all__ = ["TaskCounts", "TaskLine", "parse_tasks"]
