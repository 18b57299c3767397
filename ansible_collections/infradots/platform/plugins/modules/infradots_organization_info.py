#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_organization_info
short_description: Get information about an Infradots platform organization
version_added: "1.0.0"
description:
  - Look up an organization by I(id) or by I(name)
  - This module does not change anything

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
  id:
    description:
      - Id of the organization
    type: str
  name:
    description:
      - Name of the organization
      - Used when I(id) is not given
    type: str

author:
  - Infradots Platform Collection
'''

EXAMPLES = '''
- name: Get organization information by name
  infradots.platform.infradots_organization_info:
    token: "{{ infradots_token }}"
    name: "test-org"
  register: org_info

- name: Display organization members
  debug:
    var: org_info.organization.members
'''

RETURN = '''
organization:
  description: Organization information
  returned: success
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

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Retrieved information for organization 'test-org'"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsInfoModule,
    infradots_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    OrganizationAdapter
)


class InfradotsOrganizationInfo(InfradotsInfoModule):
    """Infradots organization information retrieval"""

    adapter_class = OrganizationAdapter
    result_key = 'organization'


def main():
    """Main function"""
    argument_spec = infradots_argument_spec()
    argument_spec.update(dict(
        id=dict(type='str'),
        name=dict(type='str')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        required_one_of=[('id', 'name')],
        supports_check_mode=True
    )

    InfradotsOrganizationInfo(module).run()


if __name__ == '__main__':
    main()
