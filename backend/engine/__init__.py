"""
Grimwild Action dice engine
Pure rules logic without web framework, database, or UI
"""

DICE_SIDES = 6

# Danger dice showing this value or higher cut one action die each.
KILLER_THRESHOLD = 4
