# Swiss Meta
# Copyright (C) 2025  Swiss Meta developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Match outcome points
WIN_POINTS = 3
TIE_POINTS = 1
LOSS_POINTS = 0
BYE_POINTS = WIN_POINTS

# Opponent id recorded for a bye
BYE_OPPONENT_ID = 0

# Best-of-three
GAMES_PER_MATCH = 3
GAMES_TO_WIN = 2

# Tie rate used when a matchup's two win rates sum to exactly 1
DEFAULT_TIE_RATE = 0.15

# Stage structure
DAY1_ROUNDS = 8
DAY2_ROUNDS = 6
DAY2_MATCH_POINT_THRESHOLD = 16  # 5-3-0 or better

# Skill modifiers
BASE_SKILL = 0.0
SKILLED_SKILL = 0.2
TUFF_SKILL = 0.4

# Synthetic deck for the undeclared share of the meta
OTHER_DECK = "Other"
OTHER_SKILL_PERCENT = 5
OTHER_WIN_RATE = 0.4  # Other vs any real deck
REAL_VS_OTHER_WIN_RATE = 0.6  # any real deck vs Other
OTHER_MIRROR_WIN_RATE = 0.5
FULL_META_PERCENT = 100

# Persistence keys
DAY1_RECORDS_KEY = "Day1Records"
DAY2_RECORDS_KEY = "Day2Records"

# Cumulative placement cuts tracked by batch runs
TOP_CUTS = (16, 32, 64, 128, 256)

# Labels for the non-cumulative placement brackets
BRACKET_LABELS = ("top16", "17-32", "33-64", "65-128", "129-256", "day2_rest")

DEFAULT_BATCH_ITERATIONS = 1000
