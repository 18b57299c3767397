# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
Infradots Platform Ansible Collection Modules

This package contains Ansible modules for managing Infradots platform
resources including organizations, workspaces, variables, and VCS connections.

Available modules:
- infradots_organization: Manage organizations (create, update, delete)
- infradots_workspace: Manage workspaces within an organization
- infradots_variable: Manage organization or workspace variables
- infradots_vcs: Manage VCS connections
- infradots_organization_info: Look up an organization by id or name
- infradots_workspace_info: Look up a workspace by id or name
- infradots_vcs_info: Look up a VCS connection by id or name
"""

__version__ = '1.0.0'
__author__ = 'Infradots Platform Collection'
