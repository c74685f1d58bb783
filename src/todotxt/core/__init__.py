"""
Core plumbing shared by the task subsystem and the CLI.

- events.py: change notification channel and event payloads
- ports.py: Protocols the CLI depends on
- state.py: AppState for the CLI
"""
