#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_workspace_info
short_description: Get information about an Infradots platform workspace
version_added: "1.0.0"
description:
  - Look up a workspace of an organization by I(id) or by I(name)
  - The attached VCS connection, if any, is returned under C(vcs)
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
      - Name of the organization the workspace belongs to
    type: str
    required: true
  id:
    description:
      - Id of the workspace
    type: str
  name:
    description:
      - Name of the workspace
      - Used when I(id) is not given
    type: str

author:
  - Infradots Platform Collection
'''

EXAMPLES = '''
- name: Get workspace information
  infradots.platform.infradots_workspace_info:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "production"
  register: ws_info

- name: Display the connected repository
  debug:
    msg: "{{ ws_info.workspace.source }}@{{ ws_info.workspace.branch }}"
'''

RETURN = '''
workspace:
  description: Workspace information
  returned: success
  type: dict
  sample:
    id: "3e340e3c-89f1-4321-bcde-ebb44567890a"
    organization_name: "test-org"
    name: "production"
    description: "Production environment"
    source: "https://github.com/example/infrastructure.git"
    branch: "main"
    terraform_version: "1.5.0"
    vcs_id: "5a560a5e-0ab3-6543-def0-a1156789012c"
    vcs:
      id: "5a560a5e-0ab3-6543-def0-a1156789012c"
      name: "github"
      vcs_type: "github"
      url: "https://github.com"
      description: ""
      created_at: "2025-07-07T12:00:00Z"
      updated_at: "2025-07-07T12:00:00Z"
    created_at: "2025-07-07T12:00:00Z"
    updated_at: "2025-07-07T12:00:00Z"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Retrieved information for workspace 'production'"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsInfoModule,
    infradots_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    WorkspaceAdapter
)


class InfradotsWorkspaceInfo(InfradotsInfoModule):
    """Infradots workspace information retrieval"""

    adapter_class = WorkspaceAdapter
    result_key = 'workspace'


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

    InfradotsWorkspaceInfo(module).run()


if __name__ == '__main__':
    main()
