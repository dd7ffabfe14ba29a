"""Game balance constants for Burn Rate."""

# Unit and structure identifiers
UNIT_TYPES = ("frigate", "cruiser", "battleship")
STRUCTURE_TYPES = ("reactor", "mine")

# Units: turns to build, cost per unit, upkeep per unit per turn
UNIT_STATS = {
    "frigate": {
        "build_time": 1,
        "build_cost": {"metal": 4, "energy": 2},
        "upkeep": {"metal": 2, "energy": 1},
    },
    "cruiser": {
        "build_time": 2,
        "build_cost": {"metal": 10, "energy": 6},
        "upkeep": {"metal": 5, "energy": 3},
    },
    "battleship": {
        "build_time": 4,
        "build_cost": {"metal": 20, "energy": 12},
        "upkeep": {"metal": 10, "energy": 6},
    },
}

# Rock-paper-scissors multipliers, attacker type -> defender type
EFFECTIVENESS_MATRIX = {
    "frigate": {"frigate": 1.0, "cruiser": 1.5, "battleship": 0.7},
    "cruiser": {"frigate": 0.7, "cruiser": 1.0, "battleship": 1.5},
    "battleship": {"frigate": 1.5, "cruiser": 0.7, "battleship": 1.0},
}

# Structures: base cost, build time, income bonus per turn
STRUCTURE_STATS = {
    "reactor": {
        "base_cost": {"metal": 900, "energy": 1200},
        "build_time": 1,
        "income_bonus": {"metal": 0, "energy": 500},
    },
    "mine": {
        "base_cost": {"metal": 1500, "energy": 600},
        "build_time": 1,
        "income_bonus": {"metal": 500, "energy": 0},
    },
}
STRUCTURE_COST_SCALING = 0.5  # Added per structure already owned
STRUCTURE_COST_EXPONENT = 1.2
STRUCTURE_MAX_PAYBACK_TURNS = 10

# Economy
BASE_INCOME = {"metal": 10000, "energy": 10000}
RESOURCE_FLOOR = -100000  # Stock never drops below this
INCOME_FLOOR = -50000  # Lowest believable per-turn income

# Starting position
STARTING_RESOURCES = {"metal": 10000, "energy": 10000}
STARTING_FLEET = {"frigates": 50, "cruisers": 20, "battleships": 10}

# Combat
RANDOM_FACTOR_RANGE = (0.8, 1.2)
DECISIVE_RATIO = 1.5
CASUALTY_RANGES = {
    "decisive_winner": (0.10, 0.30),
    "decisive_loser": (0.70, 0.90),
    "close_battle": (0.40, 0.60),
}

# Movement
TRAVEL_TURNS = 1  # Turns from launch to arrival
RETURN_TURNS = 3  # Turns from launch until the fleet is home again

# Intelligence
SCAN_COSTS = {
    "basic": {"metal": 0, "energy": 1000},
    "deep": {"metal": 0, "energy": 2500},
    "advanced": {"metal": 0, "energy": 4000},
}
SCAN_ACCURACY = {"basic": 0.7, "deep": 0.9, "advanced": 0.95}
BASIC_SCAN_RANGE = (0.4, 1.0)
DEEP_SCAN_RANGE = (0.9, 1.1)
ADVANCED_SCAN_SPLIT = {"frigate": 0.5, "cruiser": 0.3, "battleship": 0.2}
SCAN_HISTORY_LIMIT = 10
CONFIDENCE_DECAY_RATE = 0.1  # Accuracy lost per turn of data age
MIN_SCAN_ACCURACY = 0.1
MISINFORMATION_ACCURACY_PENALTY = 0.5
MISINFORMATION_RANGE = (0.5, 1.5)
IN_TRANSIT_ESTIMATE = 0.3  # Share of known fleet assumed away after a gap

# Game phases, upper turn bound of each phase
PHASE_BOUNDARIES = (("early", 5), ("mid", 15), ("late", 25))

# AI
AI_ARCHETYPES = ("aggressor", "economist", "trickster", "hybrid")
AI_STRENGTH_WEIGHTS = {"frigate": 1.0, "cruiser": 2.5, "battleship": 5.0}
COUNTER_UNITS = {"frigate": "battleship", "cruiser": "frigate", "battleship": "cruiser"}
TRICKSTER_DECEPTION_COOLDOWN = 3
HYBRID_STRATEGY_DURATION = 3

# Error log
ERROR_LOG_CAPACITY = 100

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
