# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
Reconciliation of local records against Infradots platform entities.

Each adapter maps one entity type (organization, workspace, variable, VCS
connection) onto the platform API through create/read/update/delete/import
and a read-only ``resolve`` used by the info modules. Records are plain
dictionaries using the attribute names of the Ansible modules; adapters keep
no state between calls.
"""

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from ansible_collections.infradots.platform.plugins.module_utils.infradots_api import (
    InfradotsAPIError,
    InfradotsNotFoundError,
    InfradotsSerializationError,
    InfradotsValidationError,
)

TIMESTAMP_FIELDS = ('created_at', 'updated_at')


def parse_import_id(import_id: str, formats: Sequence[str]) -> Dict[str, str]:
    """Split a colon-delimited import ID according to the first format with a matching segment count.

    ``formats`` holds colon-joined field names, e.g. ``'organization_name:name'``.
    Empty segments are rejected.
    """
    parts = import_id.split(':') if import_id else []
    for fmt in formats:
        fields = fmt.split(':')
        if len(fields) == len(parts) and all(parts):
            return dict(zip(fields, parts))

    expected = ' or '.join(f"'{fmt}'" for fmt in formats)
    raise InfradotsValidationError(
        f"Invalid import ID format '{import_id}': must be {expected}"
    )


def _segment(value: str) -> str:
    return quote(str(value), safe='')


class RemoteResourceAdapter:
    """Base class mapping one entity type onto the platform API"""

    entity = 'resource'
    natural_key = 'name'
    # Scope fields address the owning collection; optional ones may be omitted.
    scope_fields: Sequence[str] = ('organization_name',)
    optional_scope_fields: Sequence[str] = ()
    # Attributes returned by the API, in local naming.
    attributes: Sequence[str] = ()
    required_fields: Sequence[str] = ()
    mutable_fields: Sequence[str] = ()
    write_only_fields: Sequence[str] = ()
    defaults: Dict[str, Any] = {}
    wire_names: Dict[str, str] = {}
    import_formats: Sequence[str] = ('organization_name:name',)

    def __init__(self, client):
        self.client = client

    @property
    def required_scope(self) -> List[str]:
        return [f for f in self.scope_fields if f not in self.optional_scope_fields]

    def collection_path(self, scope: Dict[str, Any]) -> str:
        raise NotImplementedError

    def item_path(self, scope: Dict[str, Any], record_id: str) -> str:
        return f"{self.collection_path(scope)}{_segment(record_id)}/"

    def scope_of(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {f: record.get(f) for f in self.scope_fields}

    def describe_scope(self, scope: Dict[str, Any]) -> str:
        parts = [f"{f} '{scope[f]}'" for f in self.scope_fields if scope.get(f)]
        return ', '.join(parts) if parts else 'the platform'

    def validate(self, record: Dict[str, Any], creating: bool = True):
        """Validate input before any request is sent"""
        missing_scope = [f for f in self.required_scope if not record.get(f)]
        if missing_scope:
            raise InfradotsValidationError(
                f"{self.entity} requires {', '.join(missing_scope)}"
            )
        if creating:
            missing = [f for f in self.required_fields if record.get(f) is None]
            if missing:
                raise InfradotsValidationError(
                    f"Cannot create {self.entity}: missing {', '.join(missing)}"
                )

    # Wire mapping

    def wire_name(self, field: str) -> str:
        return self.wire_names.get(field, field)

    def to_payload(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return {self.wire_name(k): v for k, v in values.items() if v is not None}

    def create_payload(self, record: Dict[str, Any]) -> Dict[str, Any]:
        fields = [self.natural_key] + [f for f in self.mutable_fields if f != self.natural_key]
        return self.to_payload({f: record.get(f) for f in fields})

    def from_response(
        self,
        body: Any,
        scope: Dict[str, Any],
        previous: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build a record from an API body; write-only fields come from ``previous``"""
        if not isinstance(body, dict):
            raise InfradotsSerializationError(
                f"Unexpected {self.entity} response: expected an object, got {type(body).__name__}"
            )
        previous = previous or {}

        record = dict(scope)
        record['id'] = body.get('id')
        for field in self.attributes:
            record[field] = body.get(self.wire_name(field))
        for field in TIMESTAMP_FIELDS:
            record[field] = body.get(field)
        for field in self.write_only_fields:
            record[field] = previous.get(field)
        return record

    def with_defaults(self, record: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(record)
        for field, value in self.defaults.items():
            if merged.get(field) is None:
                merged[field] = value
        return merged

    def same_value(self, field: str, desired: Any, current: Any) -> bool:
        return desired == current

    def _expect(self, response, statuses: Sequence[int], action: str):
        if response.status not in statuses:
            raise InfradotsAPIError(
                f"Failed to {action} {self.entity}", response.status, response.body
            )

    def _same_record(self, record: Dict[str, Any], record_id: str) -> Dict[str, Any]:
        # An id never changes once assigned.
        if record.get('id') != record_id:
            raise InfradotsSerializationError(
                f"Unexpected {self.entity} response: requested id '{record_id}', got '{record.get('id')}'"
            )
        return record

    # Lifecycle

    def create(self, desired: Dict[str, Any]) -> Dict[str, Any]:
        """Create the remote record and return the post-create record"""
        record = self.with_defaults(desired)
        self.validate(record)
        scope = self.scope_of(record)

        response = self.client.post(self.collection_path(scope), self.create_payload(record))
        self._expect(response, (201,), 'create')
        return self.from_response(response.json(), scope, previous=record)

    def read(self, current: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Refresh ``current`` from the API; ``None`` means it no longer exists"""
        if not current.get('id'):
            raise InfradotsValidationError(f"Cannot read {self.entity} without an id")
        self.validate(current, creating=False)
        scope = self.scope_of(current)

        response = self.client.get(self.item_path(scope, current['id']))
        if response.status == 404:
            return None
        self._expect(response, (200,), 'read')
        record = self.from_response(response.json(), scope, previous=current)
        return self._same_record(record, current['id'])

    def diff(self, desired: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
        """Return the mutable fields whose desired value differs from current.

        ``None`` in ``desired`` means the field is not managed. Presence of a
        key in the result is what marks a field for update, so ``False`` is
        sent as ``False``.
        """
        changes = {}
        for field in self.mutable_fields:
            value = desired.get(field)
            if value is None:
                continue
            if not self.same_value(field, value, current.get(field)):
                changes[field] = value
        return changes

    def update(self, desired: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
        """Send only changed fields; returns ``current`` untouched when nothing changed"""
        if not current.get('id'):
            raise InfradotsValidationError(f"Cannot update {self.entity} without an id")
        self.validate(current, creating=False)
        changes = self.diff(desired, current)
        if not changes:
            return current

        scope = self.scope_of(current)
        response = self.client.patch(self.item_path(scope, current['id']), self.to_payload(changes))
        self._expect(response, (200,), 'update')

        written = dict(current)
        written.update(changes)
        record = self.from_response(response.json(), scope, previous=written)
        return self._same_record(record, current['id'])

    def delete(self, current: Dict[str, Any]):
        """Delete the remote record; an already missing record counts as deleted"""
        if not current.get('id'):
            raise InfradotsValidationError(f"Cannot delete {self.entity} without an id")
        self.validate(current, creating=False)

        response = self.client.delete(self.item_path(self.scope_of(current), current['id']))
        self._expect(response, (200, 204, 404), 'delete')

    # Lookup

    def list(self, scope: Dict[str, Any]) -> List[Dict[str, Any]]:
        response = self.client.get(self.collection_path(scope))
        self._expect(response, (200,), 'list')
        items = response.json()
        if not isinstance(items, list):
            raise InfradotsSerializationError(
                f"Unexpected {self.entity} list response: expected an array, got {type(items).__name__}"
            )
        return [self.from_response(item, scope) for item in items]

    def matches(self, scope: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
        return [r for r in self.list(scope) if r.get(self.natural_key) == name]

    def find(self, scope: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
        """First record in scope whose natural key equals ``name``"""
        found = self.matches(scope, name)
        if len(found) > 1:
            self.client.warn(
                f"Found {len(found)} {self.entity} records named '{name}' in "
                f"{self.describe_scope(scope)}; using the first one ({found[0]['id']})"
            )
        return found[0] if found else None

    def adopt(self, scope: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
        """The only record in scope whose natural key equals ``name``.

        Unlike ``find``, an ambiguous name is an error: a record that is going
        to be written to must not be picked arbitrarily.
        """
        found = self.matches(scope, name)
        if len(found) > 1:
            raise InfradotsValidationError(
                f"{len(found)} {self.entity} records share {self.natural_key} '{name}' in "
                f"{self.describe_scope(scope)}; address the record by id instead"
            )
        return found[0] if found else None

    def import_record(self, import_id: str) -> Dict[str, Any]:
        """Adopt an existing record addressed by a colon-delimited import ID"""
        fields = parse_import_id(import_id, self.import_formats)
        name = fields.pop(self.natural_key)
        scope = {f: fields.get(f) for f in self.scope_fields}

        record = self.adopt(scope, name)
        if record is None:
            raise InfradotsNotFoundError(
                f"No {self.entity} with {self.natural_key} '{name}' found in {self.describe_scope(scope)}"
            )
        return record

    def resolve(
        self,
        scope: Optional[Dict[str, Any]] = None,
        record_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Read-only lookup by id, or by natural key within scope"""
        scope = {f: (scope or {}).get(f) for f in self.scope_fields}
        missing_scope = [f for f in self.required_scope if not scope.get(f)]

        if not record_id and (not name or missing_scope):
            needed = ' and '.join(self.required_scope + [self.natural_key])
            raise InfradotsValidationError(f"Either id or {needed} must be specified")
        if record_id and missing_scope:
            raise InfradotsValidationError(
                f"{', '.join(missing_scope)} is required when looking up a {self.entity} by id"
            )

        if record_id:
            response = self.client.get(self.item_path(scope, record_id))
            if response.status == 404:
                raise InfradotsNotFoundError(f"No {self.entity} with id '{record_id}' found")
            self._expect(response, (200,), 'read')
            return self._same_record(self.from_response(response.json(), scope), record_id)

        record = self.find(scope, name)
        if record is None:
            raise InfradotsNotFoundError(
                f"No {self.entity} with {self.natural_key} '{name}' found in {self.describe_scope(scope)}"
            )
        return record

    def to_result(self, record: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Output view of a record without write-only values"""
        if record is None:
            return None
        return {k: v for k, v in record.items() if k not in self.write_only_fields}


class OrganizationAdapter(RemoteResourceAdapter):
    entity = 'organization'
    scope_fields = ()
    attributes = ('name', 'execution_mode', 'agents_enabled')
    required_fields = ('name',)
    mutable_fields = ('name', 'execution_mode', 'agents_enabled')
    defaults = {'execution_mode': 'remote', 'agents_enabled': True}
    import_formats = ('name',)

    EXECUTION_MODES = ('local', 'remote')

    def collection_path(self, scope):
        return '/api/organizations/'

    def validate(self, record, creating=True):
        super().validate(record, creating)
        mode = record.get('execution_mode')
        if mode is not None and str(mode).lower() not in self.EXECUTION_MODES:
            raise InfradotsValidationError(
                f"execution_mode must be one of {', '.join(self.EXECUTION_MODES)}, got '{mode}'"
            )

    def same_value(self, field, desired, current):
        if field == 'execution_mode' and isinstance(current, str):
            return str(desired).lower() == current.lower()
        return desired == current

    def from_response(self, body, scope, previous=None):
        record = super().from_response(body, scope, previous)
        record['members'] = [m.get('email') for m in body.get('members') or [] if isinstance(m, dict)]
        record['teams'] = [t.get('name') for t in body.get('teams') or [] if isinstance(t, dict)]
        return record


class WorkspaceAdapter(RemoteResourceAdapter):
    entity = 'workspace'
    attributes = ('name', 'description', 'source', 'branch', 'terraform_version')
    required_fields = ('name', 'source', 'branch', 'terraform_version')
    mutable_fields = ('name', 'description', 'source', 'branch', 'terraform_version', 'vcs_id')

    VCS_FIELDS = ('id', 'name', 'vcs_type', 'url', 'description', 'created_at', 'updated_at')

    def collection_path(self, scope):
        return f"/api/organizations/{_segment(scope['organization_name'])}/workspaces/"

    def from_response(self, body, scope, previous=None):
        record = super().from_response(body, scope, previous)
        vcs = body.get('vcs')
        if isinstance(vcs, dict) and vcs.get('id'):
            record['vcs'] = {
                field: vcs.get(VCSAdapter.wire_names.get(field, field))
                for field in self.VCS_FIELDS
            }
            record['vcs_id'] = vcs['id']
        else:
            # A linked VCS is only echoed back once the platform has attached it.
            record['vcs'] = None
            record['vcs_id'] = (previous or {}).get('vcs_id')
        return record


class VariableAdapter(RemoteResourceAdapter):
    entity = 'variable'
    natural_key = 'key'
    scope_fields = ('organization_name', 'workspace_name')
    optional_scope_fields = ('workspace_name',)
    attributes = ('key', 'value', 'description', 'category', 'sensitive', 'hcl')
    required_fields = ('key', 'value')
    mutable_fields = ('key', 'value', 'description', 'category', 'sensitive', 'hcl')
    defaults = {'description': '', 'category': 'terraform', 'sensitive': False, 'hcl': False}
    import_formats = ('organization_name:key', 'organization_name:workspace_name:key')

    CATEGORIES = ('terraform', 'env')

    def collection_path(self, scope):
        path = f"/api/organizations/{_segment(scope['organization_name'])}/"
        if scope.get('workspace_name'):
            path += f"workspaces/{_segment(scope['workspace_name'])}/"
        return path + 'variables/'

    def validate(self, record, creating=True):
        super().validate(record, creating)
        category = record.get('category')
        if category is not None and category not in self.CATEGORIES:
            raise InfradotsValidationError(
                f"category must be one of {', '.join(self.CATEGORIES)}, got '{category}'"
            )

    def from_response(self, body, scope, previous=None):
        record = super().from_response(body, scope, previous)
        if record.get('sensitive') and record.get('value') in (None, ''):
            record['value'] = (previous or {}).get('value')
        return record

    def to_result(self, record):
        result = super().to_result(record)
        if result and result.get('sensitive'):
            result['value'] = '***SENSITIVE***'
        return result


class VCSAdapter(RemoteResourceAdapter):
    entity = 'VCS connection'
    attributes = ('name', 'vcs_type', 'url', 'client_id', 'description')
    required_fields = ('name', 'vcs_type', 'url', 'client_id', 'client_secret')
    mutable_fields = ('name', 'vcs_type', 'url', 'client_id', 'client_secret', 'description')
    write_only_fields = ('client_secret',)
    defaults = {'description': ''}
    wire_names = {
        'vcs_type': 'vcsType',
        'url': 'endpoint',
        'client_id': 'clientId',
        'client_secret': 'clientSecret',
    }

    def collection_path(self, scope):
        return f"/api/organizations/{_segment(scope['organization_name'])}/vcs/"
