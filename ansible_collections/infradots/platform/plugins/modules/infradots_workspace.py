#!/usr/bin/python

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: infradots_workspace
short_description: Manage Infradots platform workspaces
version_added: "1.0.0"
description:
  - Create, update, or delete workspaces within an Infradots organization
  - Optionally connect the workspace to a VCS connection of the same organization

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
      - Id of an existing workspace
      - Required to rename a workspace
    type: str
  name:
    description:
      - Name of the workspace
    type: str
    required: true
  description:
    description:
      - A short description of the workspace
    type: str
  source:
    description:
      - Source repository URL or path
      - Required when the workspace is created
    type: str
  branch:
    description:
      - Git branch to use
      - Required when the workspace is created
    type: str
  terraform_version:
    description:
      - Terraform version to use, in format X.Y.Z
      - Required when the workspace is created
    type: str
  vcs_id:
    description:
      - Id of a VCS connection to attach to the workspace
    type: str
  state:
    description:
      - Whether the workspace should exist or not
    type: str
    choices: ['present', 'absent']
    default: present

author:
  - Infradots Platform Collection

notes:
  - Organization must exist before creating workspaces
'''

EXAMPLES = '''
- name: Create a workspace
  infradots.platform.infradots_workspace:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "test-workspace"
    description: "Development environment workspace"
    source: "https://github.com/example/infrastructure.git"
    branch: "main"
    terraform_version: "1.5.0"

- name: Attach a VCS connection looked up by name
  block:
    - name: Find the VCS connection
      infradots.platform.infradots_vcs_info:
        token: "{{ infradots_token }}"
        organization_name: "test-org"
        name: "github"
      register: github

    - name: Update the workspace
      infradots.platform.infradots_workspace:
        token: "{{ infradots_token }}"
        organization_name: "test-org"
        name: "test-workspace"
        vcs_id: "{{ github.vcs.id }}"

- name: Delete a workspace
  infradots.platform.infradots_workspace:
    token: "{{ infradots_token }}"
    organization_name: "test-org"
    name: "old-workspace"
    state: absent
'''

RETURN = '''
workspace:
  description: Information about the workspace
  returned: always
  type: dict
  sample:
    id: "3e340e3c-89f1-4321-bcde-ebb44567890a"
    organization_name: "test-org"
    name: "test-workspace"
    description: "Development environment workspace"
    source: "https://github.com/example/infrastructure.git"
    branch: "main"
    terraform_version: "1.5.0"
    vcs_id: null
    vcs: null
    created_at: "2025-07-07T12:00:00Z"
    updated_at: "2025-07-07T12:00:00Z"

operation:
  description: The operation that was performed
  returned: always
  type: str
  sample: "updated"

changes:
  description: Dictionary of fields that were changed
  returned: when the workspace is updated
  type: dict
  sample:
    terraform_version: "1.6.0"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Workspace 'test-workspace' created successfully"
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.infradots.platform.plugins.module_utils.infradots_base import (
    InfradotsResourceModule,
    resource_argument_spec
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    WorkspaceAdapter
)


class InfradotsWorkspace(InfradotsResourceModule):
    """Infradots workspace management"""

    adapter_class = WorkspaceAdapter
    result_key = 'workspace'


def main():
    """Main function"""
    argument_spec = resource_argument_spec()
    argument_spec.update(dict(
        organization_name=dict(type='str', required=True),
        name=dict(type='str', required=True),
        description=dict(type='str'),
        source=dict(type='str'),
        branch=dict(type='str'),
        terraform_version=dict(type='str'),
        vcs_id=dict(type='str')
    ))

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    InfradotsWorkspace(module).run()


if __name__ == '__main__':
    main()
