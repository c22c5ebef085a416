"""
Nigerian states and geopolitical zones for player and tournament records
"""

# 36 states plus the Federal Capital Territory
NIGERIAN_STATES = [
    "Abia", "Adamawa", "Akwa Ibom", "Anambra", "Bauchi",
    "Bayelsa", "Benue", "Borno", "Cross River", "Delta",
    "Ebonyi", "Edo", "Ekiti", "Enugu", "Federal Capital Territory",
    "Gombe", "Imo", "Jigawa", "Kaduna", "Kano",
    "Katsina", "Kebbi", "Kogi", "Kwara", "Lagos",
    "Nasarawa", "Niger", "Ogun", "Ondo", "Osun",
    "Oyo", "Plateau", "Rivers", "Sokoto", "Taraba",
    "Yobe", "Zamfara",
]

NIGERIA_ZONES = {
    "North Central": [
        "Benue", "Kogi", "Kwara", "Nasarawa", "Niger", "Plateau",
        "Federal Capital Territory",
    ],
    "North East": ["Adamawa", "Bauchi", "Borno", "Gombe", "Taraba", "Yobe"],
    "North West": ["Jigawa", "Kaduna", "Kano", "Katsina", "Kebbi", "Sokoto", "Zamfara"],
    "South East": ["Abia", "Anambra", "Ebonyi", "Enugu", "Imo"],
    "South South": ["Akwa Ibom", "Bayelsa", "Cross River", "Delta", "Edo", "Rivers"],
    "South West": ["Ekiti", "Lagos", "Ogun", "Ondo", "Osun", "Oyo"],
}

_ALIASES = {
    "fct": "Federal Capital Territory",
    "abuja": "Federal Capital Territory",
}


def normalize_state(state: str) -> str:
    """
    Return the canonical state name, case-insensitive.
    Accepts "FCT" and "Abuja" for the Federal Capital Territory.
    """
    cleaned = " ".join(state.split()).lower()
    if cleaned in _ALIASES:
        return _ALIASES[cleaned]
    for name in NIGERIAN_STATES:
        if name.lower() == cleaned:
            return name
    raise ValueError(f"Unknown Nigerian state: {state}")
