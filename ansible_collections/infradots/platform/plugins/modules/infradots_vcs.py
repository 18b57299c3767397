#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_vcs
short_description: Manage Infradots platform VCS connections
version_added: "1.0.0"
description:
  - Create, update, or delete VCS connections of an Infradots organization
  - The client secret is write-only and never returned by the platform

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
      - Id of an existing VCS connection
      - Required to rename a VCS connection
    type: str
  name:
    description:
      - Name of the VCS connection
    type: str
    required: true
  vcs_type:
    description:
      - Type of VCS (e.g. github, gitlab, bitbucket)
      - Required when the connection is created
    type: str
  url:
    description:
      - URL of the VCS instance
      - Required when the connection is created
    type: str
  client_id:
    description:
      - OAuth client ID for the VCS
      - Required when the connection is created
    type: str
  client_secret:
    description:
      - OAuth client secret for the VCS
      - Required when the connection is created
    type: str
  description:
    description:
      - Description of the VCS connection
      - Defaults to an empty string when the connection is created
    type: str
  update_secret:
    description:
      - C(on_create) only sends I(client_secret) when the connection is created
      - C(always) sends I(client_secret) on every run
    type: str
    choices: ['always', 'on_create']
    default: on_create
  state:
    description:
      - Whether the VCS connection should exist or not
    type: str
    choices: ['present', 'absent']
    default: present

author:
  - Infradots Platform Collection
'''

EXAMPLES = '''
- name: Create a GitHub connection
  infradots.platform.infradots_vcs:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "github"
    vcs_type: "github"
    url: "https://github.com"
    client_id: "{{ github_client_id }}"
    client_secret: "{{ github_client_secret }}"

- name: Rotate the client secret
  infradots.platform.infradots_vcs:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "github"
    client_secret: "{{ new_github_client_secret }}"
    update_secret: always
'''

RETURN = '''
vcs:
  description: Information about the VCS connection, without the client secret
  returned: always
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

operation:
  description: The operation that was performed
  returned: always
  type: str
  sample: "created"

changes:
  description: Dictionary of fields that were changed; secrets are masked
  returned: when the VCS connection is updated
  type: dict
  sample:
    client_secret: "***SENSITIVE***"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "VCS connection 'github' created successfully"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsResourceModule,
    secret_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    VCSAdapter
)


class InfradotsVCS(InfradotsResourceModule):
    """Infradots VCS connection management"""

    adapter_class = VCSAdapter
    result_key = 'vcs'
    secret_fields = ('client_secret',)


def main():
    """Main function"""
    argument_spec = secret_argument_spec()
    argument_spec.update(dict(
        organization_name=dict(type='str', required=True),
        name=dict(type='str', required=True),
        vcs_type=dict(type='str'),
        url=dict(type='str'),
        client_id=dict(type='str'),
        client_secret=dict(type='str', no_log=True),
        description=dict(type='str')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    InfradotsVCS(module).run()


if __name__ == '__main__':
    main()
