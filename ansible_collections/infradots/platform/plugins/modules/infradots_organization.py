#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_organization
short_description: Manage Infradots platform organizations
version_added: "1.0.0"
description:
  - Create, update, or delete organizations on the Infradots platform
  - An existing organization is matched by I(id) when given, otherwise by I(name)

options:
  hostname:
    description:
      - Hostname of the Infradots platform API
      - A value containing a scheme (e.g. C(http://localhost:8000)) is used as the base URL
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
  id:
    description:
      - Id of an existing organization
      - Required to rename an organization
    type: str
  name:
    description:
      - Unique name of the organization
    type: str
    required: true
  execution_mode:
    description:
      - Execution mode for the organization
      - Defaults to C(remote) when the organization is created
    type: str
    choices: ['local', 'remote', 'Local', 'Remote']
  agents_enabled:
    description:
      - Whether IDP agents are enabled for the organization
      - Defaults to C(true) when the organization is created
    type: bool
  state:
    description:
      - Whether the organization should exist or not
    type: str
    choices: ['present', 'absent']
    default: present

author:
  - Infradots Platform Collection

notes:
  - Options left unset are not managed on existing organizations
'''

EXAMPLES = '''
- name: Create an organization
  infradots.platform.infradots_organization:
    token: "{{ infradots_token }}"
    name: "test-org"
    state: present

- name: Switch an organization to local execution
  infradots.platform.infradots_organization:
    token: "{{ infradots_token }}"
    name: "test-org"
    execution_mode: "local"
    agents_enabled: false

- name: Delete an organization
  infradots.platform.infradots_organization:
    token: "{{ infradots_token }}"
    name: "old-org"
    state: absent
'''

RETURN = '''
organization:
  description: Information about the organization
  returned: always
  type: dict
  sample:
    id: "2e240d2c-78e0-4832-abdc-daa33477a238"
    name: "test-org"
    execution_mode: "remote"
    agents_enabled: true
    members: ["test@infradots.com"]
    teams: ["devops"]
    created_at: "2025-07-07T12:00:00Z"
    updated_at: "2025-07-07T12:00:00Z"

operation:
  description: The operation that was performed
  returned: always
  type: str
  sample: "created"

changes:
  description: Dictionary of fields that were changed
  returned: when the organization is updated
  type: dict
  sample:
    execution_mode: "local"
    agents_enabled: false

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Organization 'test-org' created successfully"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsResourceModule,
    resource_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    OrganizationAdapter
)


class InfradotsOrganization(InfradotsResourceModule):
    """Infradots organization management"""

    adapter_class = OrganizationAdapter
    result_key = 'organization'


def main():
    """Main function"""
    argument_spec = resource_argument_spec()
    argument_spec.update(dict(
        name=dict(type='str', required=True),
        execution_mode=dict(type='str', choices=['local', 'remote', 'Local', 'Remote']),
        agents_enabled=dict(type='bool')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    InfradotsOrganization(module).run()


if __name__ == '__main__':
    main()
