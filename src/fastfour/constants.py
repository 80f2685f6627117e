# Fast Four
# Copyright (C) 2025  Fast Four developers
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
DEFAULT_ARCHIVE_FILE = f"fastfour_history{SAVE_FILE_EXTENSION}"
DEFAULT_STATE_FILE = f"fastfour_state{SAVE_FILE_EXTENSION}"
DEFAULT_CONFIG_FILE = f"fastfour_config{SAVE_FILE_EXTENSION}"

# Cohort shape (4 groups of 3)
PLAYER_COUNT = 12
GROUP_COUNT = 4
GROUP_SIZE = 3
GROUP_LABELS = ("A", "B", "C", "D")
GROUP_NAME_TEMPLATE = "Group {label}"

# Group stage is a full round-robin among 3 players: rounds 1-3
GROUP_STAGE_ROUNDS = 3
FIRST_ROUND = 1

# Group rank at or below this value lands in the top category
TOP_CATEGORY_MAX_RANK = 2

# Identifiers
PLAYER_ID_PREFIX = "p-"
MATCH_ID_TEMPLATE = "m-r{round}-{suffix}"
RECORD_ID_PREFIX = "t"

# Match scores
DEFAULT_SCORE = 0
WIN_POINTS = 1

# Dates are stored as ISO calendar dates
DATE_FORMAT = "%Y-%m-%d"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
