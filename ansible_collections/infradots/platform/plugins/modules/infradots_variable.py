#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_variable
short_description: Manage Infradots platform variables
version_added: "1.0.0"
description:
  - Create, update, or delete a variable of an Infradots organization
  - When I(workspace_name) is given the variable belongs to that workspace instead
  - Supports both Terraform variables and environment variables

options:
  hostname:
    description:
      - Hostname of the Infradots platform API
      - Can also be set via the INFRADOTS_HOSTNAME environment variable
    type: str
    default: api.infradots.com
  token:
    description:
      - Infradots API token
      - Can also be set via the INFRADOTS_TOKEN environment variable
    type: str
    required: true
  validate_certs:
    description:
      - Whether to validate SSL certificates
    type: bool
    default: true
  timeout:
    description:
      - Timeout in seconds for each API request
    type: int
    default: 30
  follow_redirects:
    description:
      - Whether HTTP redirects returned by the API are followed
      - By default a redirect is reported as an error
      - The API token is never sent to a redirect target
    type: str
    choices: ['none', 'safe', 'all']
    default: none
  organization_name:
    description:
      - Name of the organization the variable belongs to
    type: str
    required: true
  workspace_name:
    description:
      - Name of the workspace the variable belongs to
      - Omit for an organization-wide variable
    type: str
  id:
    description:
      - Id of an existing variable
      - Required to rename a variable
    type: str
  key:
    description:
      - Name of the variable
    type: str
    required: true
  value:
    description:
      - Value of the variable
      - Required when the variable is created
    type: str
  description:
    description:
      - Description of the variable
      - Defaults to an empty string when the variable is created
    type: str
  category:
    description:
      - Category of the variable
      - Defaults to C(terraform) when the variable is created
    type: str
    choices: ['terraform', 'env']
  sensitive:
    description:
      - Whether the variable contains sensitive data
      - Sensitive values are never returned by the platform
    type: bool
  hcl:
    description:
      - Whether the value is parsed as HCL
    type: bool
  update_secret:
    description:
      - C(on_create) only sends the value of a sensitive variable when the variable is created,
        since the platform never reports the current value back
      - C(always) sends the value of a sensitive variable on every run
    type: str
    choices: ['always', 'on_create']
    default: on_create
  state:
    description:
      - Whether the variable should exist or not
    type: str
    choices: ['present', 'absent']
    default: present

author:
  - Infradots Platform Collection
'''

EXAMPLES = '''
- name: Create an organization variable
  infradots.platform.infradots_variable:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    key: "region"
    value: "eu-west-1"

- name: Create a sensitive environment variable for a workspace
  infradots.platform.infradots_variable:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    workspace_name: "test-workspace"
    key: "AWS_SECRET_ACCESS_KEY"
    value: "{{ aws_secret_key }}"
    category: "env"
    sensitive: true

- name: Remove a workspace variable
  infradots.platform.infradots_variable:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    workspace_name: "test-workspace"
    key: "old_variable"
    state: absent
'''

RETURN = '''
variable:
  description: Information about the variable; sensitive values are masked
  returned: always
  type: dict
  sample:
    id: "4f450f4d-9af2-5432-cdef-f0045678901b"
    organization_name: "test-org"
    workspace_name: null
    key: "region"
    value: "eu-west-1"
    description: ""
    category: "terraform"
    sensitive: false
    hcl: false
    created_at: "2025-07-07T12:00:00Z"
    updated_at: "2025-07-07T12:00:00Z"

operation:
  description: The operation that was performed
  returned: always
  type: str
  sample: "created"

changes:
  description: Dictionary of fields that were changed; values of sensitive variables are masked
  returned: when the variable is updated
  type: dict
  sample:
    description: "AWS region"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Variable 'region' created successfully"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsResourceModule,
    secret_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    VariableAdapter
)


class InfradotsVariable(InfradotsResourceModule):
    """Infradots variable management"""

    adapter_class = VariableAdapter
    result_key = 'variable'
    secret_fields = ('value',)

    def _mask(self, values, current, record):
        if current.get('sensitive') or record.get('sensitive'):
            return super()._mask(values, current, record)
        return dict(values)


def main():
    """Main function"""
    argument_spec = secret_argument_spec()
    argument_spec.update(dict(
        organization_name=dict(type='str', required=True),
        workspace_name=dict(type='str'),
        key=dict(type='str', required=True, no_log=False),
        value=dict(type='str', no_log=True),
        description=dict(type='str'),
        category=dict(type='str', choices=['terraform', 'env']),
        sensitive=dict(type='bool'),
        hcl=dict(type='bool')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    InfradotsVariable(module).run()


if __name__ == '__main__':
    main()
