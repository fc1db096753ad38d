"""
Gamification subsystem.

Components:
- profile.py: Profile, BadgeSet, Mood
- achievements.py: the versioned badge rule set
- engine.py: XP / level / streak / badge rules driven by domain events
- motivation.py: motivational quotes
"""
