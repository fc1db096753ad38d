"""
Focus sessions.

Components:
- focus_models.py: FocusPhase, FocusSnapshot
- timer.py: work/break countdown state machine
- ticker.py: repeating tick on the asyncio loop
"""
