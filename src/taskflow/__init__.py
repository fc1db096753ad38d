"""
TaskFlow: a to-do list that plays like a game.

Subpackages:
- tasks/: Task model and the TaskStore state machine
- game/: profile, badge rules and the gamification engine
- focus/: work/break focus timer and its asyncio ticker
- storage/: snapshot codec, JSON/SQLite gateways, export
- core/: events, ports and the AppState aggregate
- cli/, connectors/: console front-end
"""

__version__ = "1.0.0"
