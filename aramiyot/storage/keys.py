"""
Local storage keys
"""

CHAT_HISTORY_KEY = "aramiyot_chat_history"
BOARDS_KEY = "aramiyot_boards"
# Spelling matches data already written by existing installs
TODOS_KEY = "armiyot_dashboard_todos"


def reviews_key(resource_id: str) -> str:
    return f"reviews_{resource_id}"


def offline_key(resource_id: str) -> str:
    return f"offline_{resource_id}"
