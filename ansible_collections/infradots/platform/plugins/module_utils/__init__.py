# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
Infradots Platform Ansible Collection Module Utils

This package provides the API client and the record reconciliation
adapters shared by the Infradots platform modules.
"""

__version__ = '1.0.0'
__author__ = 'Infradots Platform Collection'

from .infradots_api import (
    InfradotsClient,
    InfradotsConnection,
    InfradotsError,
    InfradotsAPIError,
    InfradotsNotFoundError,
    InfradotsSerializationError,
    InfradotsTransportError,
    InfradotsValidationError
)
from .infradots_resources import (
    OrganizationAdapter,
    RemoteResourceAdapter,
    VariableAdapter,
    VCSAdapter,
    WorkspaceAdapter,
    parse_import_id
)

__all__ = [
    'InfradotsClient',
    'InfradotsConnection',
    'InfradotsError',
    'InfradotsAPIError',
    'InfradotsNotFoundError',
    'InfradotsSerializationError',
    'InfradotsTransportError',
    'InfradotsValidationError',
    'OrganizationAdapter',
    'RemoteResourceAdapter',
    'VariableAdapter',
    'VCSAdapter',
    'WorkspaceAdapter',
    'parse_import_id'
]
