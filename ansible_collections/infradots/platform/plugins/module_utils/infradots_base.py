# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

import traceback
from typing import Any, Dict, Optional

from ansible.module_utils.basic import AnsibleModule, env_fallback

from ansible_collections.infradots.platform.plugins.module_utils.infradots_api import (
    DEFAULT_HOSTNAME,
    DEFAULT_FOLLOW_REDIRECTS,
    DEFAULT_TIMEOUT,
    InfradotsAPIError,
    InfradotsClient,
    InfradotsConnection,
    InfradotsError,
    InfradotsNotFoundError,
    InfradotsSerializationError,
    InfradotsTransportError,
    InfradotsValidationError,
)

SENSITIVE_MASK = '***SENSITIVE***'


class InfradotsBase:
    """Base class for Infradots platform modules"""

    def __init__(self, module: AnsibleModule):
        self.module = module
        self.changed = False
        self.client = None

        self._init_client()

    def _init_client(self):
        """Initialize the API client from the connection options"""
        try:
            connection = InfradotsConnection.from_params(self.module.params)
            self.client = InfradotsClient(self.module, connection)
        except InfradotsError as e:
            self.module.fail_json(msg=f"Failed to initialize Infradots client: {e}")
            return

        if not connection.validate_certs:
            self.module.warn(
                "TLS certificate verification is disabled for the Infradots API; "
                "only use validate_certs=false against trusted test endpoints"
            )

    def _handle_infradots_exception(self, e: Exception, operation: str):
        """Convert errors raised by the client or adapters into a module failure"""
        if isinstance(e, InfradotsAPIError):
            if e.status == 401:
                msg = f"Authentication failed during {operation}"
            elif e.status == 403:
                msg = f"Insufficient permissions for {operation}"
            else:
                msg = f"{e.message} during {operation}: status {e.status}"
            self.module.fail_json(msg=msg, status=e.status, body=e.body)
        elif isinstance(e, InfradotsValidationError):
            self.module.fail_json(msg=f"Validation error during {operation}: {e}")
        elif isinstance(e, InfradotsNotFoundError):
            self.module.fail_json(msg=f"Resource not found during {operation}: {e}")
        elif isinstance(e, (InfradotsTransportError, InfradotsSerializationError)):
            self.module.fail_json(msg=f"Error during {operation}: {e}")
        else:
            self.module.fail_json(
                msg=f"Unexpected error during {operation}: {e}",
                exception=traceback.format_exc()
            )

    def exit_json(self, **kwargs):
        """Exit with JSON response"""
        kwargs['changed'] = self.changed
        self.module.exit_json(**kwargs)

    def fail_json(self, **kwargs):
        """Exit with failure"""
        self.module.fail_json(**kwargs)


class InfradotsResourceModule(InfradotsBase):
    """Drives one adapter towards ``state: present`` or ``state: absent``.

    Subclasses set ``adapter_class`` and ``result_key``. Module options are
    named after the adapter's record fields.
    """

    adapter_class = None
    result_key = 'resource'
    # Write-only fields governed by the update_secret option.
    secret_fields = ()

    def __init__(self, module: AnsibleModule):
        super().__init__(module)
        self.adapter = self.adapter_class(self.client)

    def desired_state(self) -> Dict[str, Any]:
        adapter = self.adapter
        fields = list(adapter.scope_fields) + list(adapter.mutable_fields)
        return {f: self.module.params.get(f) for f in fields}

    @property
    def display_name(self) -> str:
        return self.module.params.get(self.adapter.natural_key) or self.module.params.get('id')

    @property
    def entity_title(self) -> str:
        return self.adapter.entity[:1].upper() + self.adapter.entity[1:]

    def run(self):
        """Main execution method"""
        state = self.module.params['state']

        try:
            if state == 'present':
                result = self._ensure_present()
            else:
                result = self._ensure_absent()
        except Exception as e:
            self._handle_infradots_exception(e, f"{self.adapter.entity} {state}")
            return

        self.exit_json(**result)

    def _locate(self, desired: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Current remote record, by id when given, else by natural key"""
        self.adapter.validate(desired, creating=False)
        scope = self.adapter.scope_of(desired)

        record_id = self.module.params.get('id')
        if record_id:
            current = dict(scope, id=record_id)
            return self.adapter.read(current)

        name = desired.get(self.adapter.natural_key)
        if not name:
            raise InfradotsValidationError(
                f"Either id or {self.adapter.natural_key} is required"
            )
        return self.adapter.adopt(scope, name)

    def _retain_secrets(self, desired: Dict[str, Any], current: Dict[str, Any]):
        # The API never echoes these values, so an unknown current value is
        # taken to be the configured one unless asked to always resend it.
        if self.module.params.get('update_secret', 'on_create') != 'on_create':
            return
        for field in self.secret_fields:
            if current.get(field) is None:
                current[field] = desired.get(field)

    def _mask(self, values: Dict[str, Any], current: Dict[str, Any], record: Dict[str, Any]) -> Dict[str, Any]:
        """Hide secret fields in reported changes; ``current`` and ``record`` are the before and after views"""
        return {k: (SENSITIVE_MASK if k in self.secret_fields else v) for k, v in values.items()}

    def _ensure_present(self) -> Dict[str, Any]:
        """Ensure the record exists with the configured attributes"""
        desired = self.desired_state()
        current = self._locate(desired)

        if current is None:
            return self._create(desired)
        return self._update(desired, current)

    def _ensure_absent(self) -> Dict[str, Any]:
        """Ensure the record does not exist"""
        desired = self.desired_state()
        current = self._locate(desired)

        if current is None:
            return {
                self.result_key: None,
                'operation': 'none',
                'msg': f"{self.entity_title} '{self.display_name}' already absent"
            }

        if not self.module.check_mode:
            self.adapter.delete(current)
        self.changed = True

        return {
            self.result_key: self.adapter.to_result(current),
            'operation': 'deleted',
            'msg': f"{self.entity_title} '{self.display_name}' deleted successfully"
        }

    def _create(self, desired: Dict[str, Any]) -> Dict[str, Any]:
        if self.module.check_mode:
            record = self.adapter.with_defaults(desired)
            self.adapter.validate(record)
        else:
            record = self.adapter.create(desired)
        self.changed = True

        return {
            self.result_key: self.adapter.to_result(record),
            'operation': 'created',
            'msg': f"{self.entity_title} '{self.display_name}' created successfully"
        }

    def _update(self, desired: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
        self._retain_secrets(desired, current)
        changes = self.adapter.diff(desired, current)

        if not changes:
            return {
                self.result_key: self.adapter.to_result(current),
                'operation': 'none',
                'msg': f"{self.entity_title} '{self.display_name}' already in desired state"
            }

        if self.module.check_mode:
            record = dict(current, **changes)
        else:
            record = self.adapter.update(desired, current)
        self.changed = True

        return {
            self.result_key: self.adapter.to_result(record),
            'operation': 'updated',
            'changes': self._mask(changes, current, record),
            'msg': f"{self.entity_title} '{self.display_name}' updated successfully"
        }


class InfradotsInfoModule(InfradotsBase):
    """Read-only lookup of one record by id or natural key"""

    adapter_class = None
    result_key = 'resource'

    def __init__(self, module: AnsibleModule):
        super().__init__(module)
        self.adapter = self.adapter_class(self.client)

    def run(self):
        """Main execution method"""
        params = self.module.params
        try:
            record = self.adapter.resolve(
                scope={f: params.get(f) for f in self.adapter.scope_fields},
                record_id=params.get('id'),
                name=params.get(self.adapter.natural_key),
            )
        except Exception as e:
            self._handle_infradots_exception(e, f"{self.adapter.entity} info retrieval")
            return

        self.exit_json(**{
            self.result_key: self.adapter.to_result(record),
            'msg': f"Retrieved information for {self.adapter.entity} '{record.get(self.adapter.natural_key)}'"
        })


def infradots_argument_spec():
    """Connection options shared by every Infradots module"""
    return dict(
        hostname=dict(
            type='str',
            default=DEFAULT_HOSTNAME,
            fallback=(env_fallback, ['INFRADOTS_HOSTNAME'])
        ),
        token=dict(
            type='str',
            required=True,
            no_log=True,
            fallback=(env_fallback, ['INFRADOTS_TOKEN'])
        ),
        validate_certs=dict(type='bool', default=True),
        timeout=dict(type='int', default=DEFAULT_TIMEOUT),
        follow_redirects=dict(type='str', default=DEFAULT_FOLLOW_REDIRECTS, choices=['none', 'safe', 'all'])
    )


def resource_argument_spec():
    """Options common to the modules that manage a record"""
    spec = infradots_argument_spec()
    spec.update(dict(
        id=dict(type='str'),
        state=dict(type='str', choices=['present', 'absent'], default='present')
    ))
    return spec


def secret_argument_spec():
    spec = resource_argument_spec()
    spec.update(dict(
        update_secret=dict(type='str', choices=['always', 'on_create'], default='on_create', no_log=False)
    ))
    return spec
