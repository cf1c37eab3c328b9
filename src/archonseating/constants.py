# Archon Seating
# Copyright (C) 2025  Archon Seating developers
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
CONFIG_FILE_EXTENSION = ".json"

# Table topology
MIN_PLAYERS = 6
TABLE_SIZES = (4, 5)
STAGGERED_COUNTS = (6, 7, 11)

# Starting transfers per seat (seat 5 starts with the same as seat 4)
SEAT_TRANSFERS = (1, 2, 3, 4, 4)

# Position matrix columns (players x 8)
POS_PLAYED = 0
POS_VPS = 1
POS_TRANSFERS = 2
POS_SEAT_1 = 3
POS_SEAT_5 = 7
SEATS_COUNT = POS_SEAT_5 - POS_SEAT_1 + 1
POSITION_COLUMNS = 8

# Opponents matrix flags (players x players x 8)
OPP_OPPONENT = 0
OPP_PREY = 1
OPP_GRAND_PREY = 2
OPP_GRAND_PREDATOR = 3
OPP_PREDATOR = 4
OPP_CROSS_TABLE = 5
OPP_NEIGHBOUR = 6
OPP_NON_NEIGHBOUR = 7
OPPONENT_FLAGS = 8

# Rule keys
R1_PREDATOR_PREY = "R1"
R2_OPPONENT_THRICE = "R2"
R3_AVAILABLE_VPS = "R3"
R4_OPPONENT_TWICE = "R4"
R5_FIFTH_SEAT = "R5"
R6_POSITION = "R6"
R7_SAME_SEAT = "R7"
R8_STARTING_TRANSFERS = "R8"
R9_POSITION_GROUP = "R9"

# The seating rules: code, label, weight.
# Weights are devised so that major rules always prevail over minor rules.
RULES = [
    (R1_PREDATOR_PREY, "predator-prey", 10**9),
    (R2_OPPONENT_THRICE, "opponent thrice", 10**8),
    (R3_AVAILABLE_VPS, "available vps", 10**7),
    (R4_OPPONENT_TWICE, "opponent twice", 10**6),
    (R5_FIFTH_SEAT, "fifth seat", 10**5),
    (R6_POSITION, "position", 10**4),
    (R7_SAME_SEAT, "same seat", 10**3),
    (R8_STARTING_TRANSFERS, "starting transfers", 10**2),
    (R9_POSITION_GROUP, "position group", 10**1),
]

# Stddev rules need a factor of 100 over the next one to prevail
STDDEV_RULES = (R3_AVAILABLE_VPS, R8_STARTING_TRANSFERS)
STDDEV_AMPLIFICATION = 100

# Optimizer defaults
DEFAULT_ROUNDS = 3
DEFAULT_ITERATIONS = 20000
DEFAULT_RESTARTS = 1
