"""Enumerations shared by the domain model."""

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

from enum import Enum


class Phase(str, Enum):
    """Tournament phase. A match keeps the phase it was created in."""

    GROUPS = "GROUPS"
    PLAYOFFS = "PLAYOFFS"
    FINISHED = "FINISHED"


class Category(str, Enum):
    """Playoff seeding pool derived from the group rank."""

    TOP_8 = "TOP_8"
    BOTTOM_4 = "BOTTOM_4"
