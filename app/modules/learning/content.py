# Sample series shown on the dashboard. Progress tracking is not persisted
# yet, so every student sees the same numbers.

PROGRESS_SERIES = [
    {"week": "Week 1", "progress": 45},
    {"week": "Week 2", "progress": 62},
    {"week": "Week 3", "progress": 78},
    {"week": "Week 4", "progress": 85},
]

STATS = [
    {"label": "Lessons Completed", "value": "12/20"},
    {"label": "Current Streak", "value": "7 days"},
    {"label": "Total Points", "value": "450"},
    {"label": "Avg Score", "value": "85%"},
]

ACHIEVEMENTS = [
    {"title": "First Steps", "earned": "2 days ago"},
    {"title": "Week Warrior", "earned": "2 days ago"},
    {"title": "Triangle Master", "earned": "2 days ago"},
]

MATERIALS = [
    {"id": 1, "title": "Introduction to Triangles", "duration": "15 min", "completed": True, "difficulty": "Beginner"},
    {"id": 2, "title": "Triangle Inequality Theorem", "duration": "20 min", "completed": True, "difficulty": "Beginner"},
    {"id": 3, "title": "Interactive Triangle Builder", "duration": "30 min", "completed": False, "difficulty": "Intermediate"},
]
