# Percentiles used for every per-machine statistic
MEDIAN_PERCENTILE = 50
CEILING_PERCENTILE = 90

# Likely players kept per machine (ranked by games, then P50)
LIKELY_PLAYER_COUNT = 2

# Strongest/weakest summary
MIN_GAMES_FOR_ANALYSIS = 3  # Machines with fewer games are left out
SUMMARY_SIZE = 3            # Machines listed per side

# Matchup confidence, by the smaller side's average games per likely player
HIGH_CONFIDENCE_GAMES = 10
MEDIUM_CONFIDENCE_GAMES = 3

# Recommend verdict threshold, in raw score units (not a percentage)
VERDICT_THRESHOLD = 1_000_000
