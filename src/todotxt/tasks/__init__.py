"""
Task subsystem.

Components:
- task_models.py: Task (one todo.txt line) and its parser/renderer
- task_search.py: substring / negated substring filtering
- task_list.py: TaskList, the ordered collection with load/save and change events
- task_store.py: todo file on disk (the only file-system access)
"""
