#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_vcs_info
short_description: Get information about an Infradots platform VCS connection
version_added: "1.0.0"
description:
  - Look up a VCS connection of an organization by I(id) or by I(name)
  - The client secret is never returned
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
  organization_name:
    description:
      - Name of the organization the VCS connection belongs to
    type: str
    required: true
  id:
    description:
      - Id of the VCS connection
    type: str
  name:
    description:
      - Name of the VCS connection
      - Used when I(id) is not given
    type: str

author:
  - Infradots Platform Collection
'''

EXAMPLES = '''
- name: Get a VCS connection by name
  infradots.platform.infradots_vcs_info:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "github"
  register: github
'''

RETURN = '''
vcs:
  description: VCS connection information
  returned: success
  type: dict
  sample:
    id: "5a560a5e-0ab3-6543-def0-a1156789012c"
    organization_name: "test-org"
    name: "github"
    vcs_type: "github"
    url: "https://github.com"
    client_id: "abc123"
    description: ""
    created_at: "2025-07-07T12:00:00Z"
    updated_at: "2025-07-07T12:00:00Z"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Retrieved information for VCS connection 'github'"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsInfoModule,
    infradots_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    VCSAdapter
)


class InfradotsVCSInfo(InfradotsInfoModule):
    """Infradots VCS connection information retrieval"""

    adapter_class = VCSAdapter
    result_key = 'vcs'


def main():
    """Main function"""
    argument_spec = infradots_argument_spec()
    argument_spec.update(dict(
        organization_name=dict(type='str', required=True),
        id=dict(type='str'),
        name=dict(type='str')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        required_one_of=[('id', 'name')],
        supports_check_mode=True
    )

    InfradotsVCSInfo(module).run()


if __name__ == '__main__':
    main()
