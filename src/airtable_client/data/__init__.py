# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Airtable Web API access.

Internal modules build request URLs and payloads and normalize responses.
"""

__all__ = []
