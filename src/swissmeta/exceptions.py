"""Exceptions for use in Swiss Meta"""

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


# ========== Base Application Exception ==========


class SwissMetaException(Exception):
    """Base exception for all Swiss Meta errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissMetaException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data cannot be parsed."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass


class MissingDay1DataException(MissingConfigurationException):
    """Raised when Day 2 is requested without any Day 1 standings to continue from."""

    pass


# ========== Storage Exceptions ==========


class StorageException(SwissMetaException):
    """Base exception for stage record persistence errors."""

    pass


class RecordCorruptedException(StorageException):
    """Raised when a stored record cannot be decoded into players."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(SwissMetaException):
    """Raised when caller-side input validation fails."""

    pass
