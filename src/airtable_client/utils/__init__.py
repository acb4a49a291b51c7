# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utilities for the Airtable client.

Internal helpers, such as pandas conversion, live in private modules.
"""

__all__ = []
