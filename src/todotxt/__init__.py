"""
todo.txt parsing, editing and searching.

    from todotxt import TaskList, Task

    tasks = TaskList()
    tasks.load_tasks_from_string("(A) call mom +family @phone\nbuy milk\n")
    for task in tasks.search("+family"):
        task.toggle_completed()
"""

from .core.events import (
    ChangeEvent,
    CollectionReset,
    EventChannel,
    FieldChanged,
    TaskAdded,
    TaskAspect,
    TaskRemoved,
    TaskReplaced,
)
from .errors import TaskFileError, TaskFileReadError, TaskFileWriteError, TodoTxtError
from .tasks.task_list import TaskList, split_lines
from .tasks.task_models import Task, parse_task
from .tasks.task_search import filter_tasks, matches
from .tasks.task_store import TaskStore

__all__ = [
    "ChangeEvent",
    "CollectionReset",
    "EventChannel",
    "FieldChanged",
    "TaskAdded",
    "TaskAspect",
    "TaskRemoved",
    "TaskReplaced",
    "TaskFileError",
    "TaskFileReadError",
    "TaskFileWriteError",
    "TodoTxtError",
    "TaskList",
    "split_lines",
    "Task",
    "parse_task",
    "filter_tasks",
    "matches",
    "TaskStore",
]
