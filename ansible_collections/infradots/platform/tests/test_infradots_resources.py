"""
Tests for the record adapters against the simulated platform API.
"""

import unittest

from ansible_collections.infradots.platform.plugins.module_utils.infradots_api import (
    InfradotsAPIError,
    InfradotsClient,
    InfradotsConnection,
    InfradotsNotFoundError,
    InfradotsSerializationError,
    InfradotsValidationError,
)
from ansible_collections.infradots.platform.plugins.module_utils.infradots_resources import (
    OrganizationAdapter,
    VariableAdapter,
    VCSAdapter,
    WorkspaceAdapter,
    parse_import_id,
)

from fake_api import FakeInfradotsAPI, make_module

ORG = {'organization_name': 'test-org'}


def workspace_desired(**overrides):
    desired = {
        'organization_name': 'test-org',
        'name': 'test-workspace',
        'description': 'Test workspace',
        'source': 'https://github.com/example/infrastructure.git',
        'branch': 'main',
        'terraform_version': '1.5.0',
        'vcs_id': None,
    }
    desired.update(overrides)
    return desired


def vcs_desired(**overrides):
    desired = {
        'organization_name': 'test-org',
        'name': 'github',
        'vcs_type': 'github',
        'url': 'https://github.com',
        'client_id': 'abc123',
        'client_secret': 'shh',
        'description': None,
    }
    desired.update(overrides)
    return desired


class AdapterTestCase(unittest.TestCase):
    """Adapters wired to a fresh simulated API"""

    def setUp(self):
        self.api = FakeInfradotsAPI()
        patcher = self.api.patch()
        patcher.start()
        self.addCleanup(patcher.stop)

        self.module = make_module({})
        self.client = InfradotsClient(
            self.module, InfradotsConnection(hostname='api.infradots.test', token='test-token')
        )
        self.orgs = OrganizationAdapter(self.client)
        self.workspaces = WorkspaceAdapter(self.client)
        self.variables = VariableAdapter(self.client)
        self.vcs = VCSAdapter(self.client)


class TestParseImportId(unittest.TestCase):

    def test_two_segments(self):
        fields = parse_import_id('test-org:test-workspace', ('organization_name:name',))
        self.assertEqual(fields, {'organization_name': 'test-org', 'name': 'test-workspace'})

    def test_picks_format_by_segment_count(self):
        formats = VariableAdapter.import_formats
        self.assertEqual(
            parse_import_id('org:ws:key', formats),
            {'organization_name': 'org', 'workspace_name': 'ws', 'key': 'key'}
        )
        self.assertEqual(parse_import_id('org:key', formats), {'organization_name': 'org', 'key': 'key'})

    def test_rejects_other_segment_counts(self):
        for bad in ('a', 'a:b:c:d', '', 'a:', ':b'):
            with self.assertRaises(InfradotsValidationError):
                parse_import_id(bad, ('organization_name:name',))


class TestOrganizationAdapter(AdapterTestCase):

    def test_create_read_update_scenario(self):
        created = self.orgs.create({'name': 'test-org'})

        self.assertEqual(self.api.calls('POST')[0]['path'], '/api/organizations/')
        self.assertEqual(
            self.api.calls('POST')[0]['payload'],
            {'name': 'test-org', 'execution_mode': 'remote', 'agents_enabled': True}
        )
        self.assertEqual(created['execution_mode'], 'remote')
        self.assertTrue(created['agents_enabled'])
        self.assertEqual(created['members'], ['test@infradots.com'])
        self.assertEqual(created['teams'], ['devops'])

        self.assertEqual(self.orgs.read({'id': created['id']}), created)

        updated = self.orgs.update(
            {'name': 'test-org', 'execution_mode': 'Local', 'agents_enabled': False},
            created
        )
        self.assertEqual(
            self.api.calls('PATCH')[0]['payload'],
            {'execution_mode': 'Local', 'agents_enabled': False}
        )
        self.assertEqual(self.api.calls('PATCH')[0]['path'], f"/api/organizations/{created['id']}/")

        refreshed = self.orgs.read(updated)
        self.assertEqual(refreshed['id'], created['id'])
        self.assertEqual(refreshed['execution_mode'], 'Local')
        self.assertFalse(refreshed['agents_enabled'])
        self.assertGreater(refreshed['updated_at'], created['updated_at'])
        self.assertEqual(refreshed['created_at'], created['created_at'])

    def test_execution_mode_compared_case_insensitively(self):
        created = self.orgs.create({'name': 'test-org', 'execution_mode': 'remote'})
        self.assertEqual(self.orgs.diff({'execution_mode': 'Remote'}, created), {})

    def test_false_is_sent_explicitly_on_create(self):
        self.orgs.create({'name': 'test-org', 'agents_enabled': False})
        self.assertIs(self.api.calls('POST')[0]['payload']['agents_enabled'], False)

    def test_invalid_execution_mode(self):
        with self.assertRaises(InfradotsValidationError):
            self.orgs.create({'name': 'test-org', 'execution_mode': 'hybrid'})
        self.assertEqual(self.api.requests, [])

    def test_import_by_name(self):
        created = self.orgs.create({'name': 'test-org'})
        self.assertEqual(self.orgs.import_record('test-org')['id'], created['id'])

    def test_import_not_found(self):
        with self.assertRaises(InfradotsNotFoundError):
            self.orgs.import_record('nonexistent-org')

    def test_resolve_requires_id_or_name(self):
        with self.assertRaises(InfradotsValidationError):
            self.orgs.resolve()
        self.assertEqual(self.api.requests, [])

    def test_resolve_by_id(self):
        created = self.orgs.create({'name': 'test-org'})
        self.assertEqual(self.orgs.resolve(record_id=created['id']), created)


class TestWorkspaceAdapter(AdapterTestCase):

    def test_create_then_read_matches(self):
        created = self.workspaces.create(workspace_desired())

        call = self.api.calls('POST')[0]
        self.assertEqual(call['path'], '/api/organizations/test-org/workspaces/')
        self.assertNotIn('vcs_id', call['payload'])
        self.assertEqual(call['headers']['Authorization'], 'Bearer test-token')

        self.assertIsNone(created['vcs'])
        self.assertEqual(created['organization_name'], 'test-org')
        self.assertEqual(self.workspaces.read(created), created)

    def test_create_requires_source_branch_and_version(self):
        with self.assertRaises(InfradotsValidationError):
            self.workspaces.create(workspace_desired(source=None))
        self.assertEqual(self.api.requests, [])

    def test_update_sends_only_changed_fields(self):
        created = self.workspaces.create(workspace_desired())

        updated = self.workspaces.update(workspace_desired(description='Changed'), created)

        patch = self.api.calls('PATCH')[0]
        self.assertEqual(patch['payload'], {'description': 'Changed'})
        self.assertEqual(
            patch['path'], f"/api/organizations/test-org/workspaces/{created['id']}/"
        )
        self.assertEqual(updated['description'], 'Changed')
        self.assertEqual(updated['id'], created['id'])

    def test_unmanaged_fields_are_left_alone(self):
        created = self.workspaces.create(workspace_desired())
        self.assertEqual(self.workspaces.diff(workspace_desired(description=None), created), {})

    def test_update_without_changes_sends_nothing(self):
        created = self.workspaces.create(workspace_desired())
        self.assertIs(self.workspaces.update(workspace_desired(), created), created)
        self.assertEqual(self.api.calls('PATCH'), [])

    def test_embedded_vcs(self):
        vcs_id = self.api.seed('organizations/test-org/vcs', {
            'name': 'github',
            'vcsType': 'github',
            'endpoint': 'https://github.com',
            'clientId': 'abc123',
            'description': '',
        })

        created = self.workspaces.create(workspace_desired(vcs_id=vcs_id))

        self.assertEqual(self.api.calls('POST')[0]['payload']['vcs_id'], vcs_id)
        self.assertEqual(created['vcs_id'], vcs_id)
        self.assertEqual(created['vcs']['name'], 'github')
        self.assertEqual(created['vcs']['vcs_type'], 'github')
        self.assertEqual(created['vcs']['url'], 'https://github.com')

    def test_read_not_found_returns_none(self):
        self.assertIsNone(self.workspaces.read(dict(ORG, id='missing')))

    def test_read_unexpected_status(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('GET', 500, 'boom')
        with self.assertRaises(InfradotsAPIError) as ctx:
            self.workspaces.read(created)
        self.assertEqual(ctx.exception.status, 500)

    def test_read_redirect_is_an_error(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('GET', 302, '')
        with self.assertRaises(InfradotsAPIError) as ctx:
            self.workspaces.read(created)
        self.assertEqual(ctx.exception.status, 302)
        self.assertEqual(len(self.api.calls('GET')), 1)

    def test_read_rejects_a_different_record(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('GET', 200, {'id': 'other', 'name': 'hijacked'})
        with self.assertRaises(InfradotsSerializationError):
            self.workspaces.read(created)

    def test_update_rejects_a_different_record(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('PATCH', 200, {'id': 'other', 'name': 'hijacked'})
        with self.assertRaises(InfradotsSerializationError):
            self.workspaces.update(workspace_desired(description='Changed'), created)

    def test_read_malformed_body(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('GET', 200, 'not json')
        with self.assertRaises(InfradotsSerializationError):
            self.workspaces.read(created)

    def test_create_unexpected_status_reports_body(self):
        self.api.force('POST', 409, '{"error": "workspace already exists"}')
        with self.assertRaises(InfradotsAPIError) as ctx:
            self.workspaces.create(workspace_desired())
        self.assertEqual(ctx.exception.status, 409)
        self.assertIn('workspace already exists', ctx.exception.body)
        self.assertIn('409', str(ctx.exception))

    def test_delete_accepts_gone_statuses(self):
        for status in (200, 204, 404):
            created = self.workspaces.create(workspace_desired(name=f"ws-{status}"))
            self.api.force('DELETE', status)
            self.workspaces.delete(created)

    def test_delete_default_removes_record(self):
        created = self.workspaces.create(workspace_desired())
        self.workspaces.delete(created)
        self.assertIsNone(self.workspaces.read(created))

    def test_delete_failure_keeps_record(self):
        created = self.workspaces.create(workspace_desired())
        self.api.force('DELETE', 500, 'boom')
        with self.assertRaises(InfradotsAPIError):
            self.workspaces.delete(created)
        self.assertEqual(self.workspaces.read(created)['id'], created['id'])

    def test_import_matches_lookup_by_name(self):
        created = self.workspaces.create(workspace_desired())

        imported = self.workspaces.import_record('test-org:test-workspace')
        resolved = self.workspaces.resolve(ORG, name='test-workspace')

        self.assertEqual(imported['id'], created['id'])
        self.assertEqual(resolved['id'], created['id'])
        self.assertEqual(imported['organization_name'], 'test-org')

    def test_import_rejects_bad_format_before_any_request(self):
        for bad in ('test-org', 'a:b:c:d'):
            with self.assertRaises(InfradotsValidationError):
                self.workspaces.import_record(bad)
        self.assertEqual(self.api.requests, [])

    def test_import_not_found(self):
        with self.assertRaises(InfradotsNotFoundError):
            self.workspaces.import_record('test-org:missing')

    def test_duplicate_names(self):
        first = self.api.seed('organizations/test-org/workspaces', {'name': 'dup'})
        self.api.seed('organizations/test-org/workspaces', {'name': 'dup'})

        with self.assertRaises(InfradotsValidationError):
            self.workspaces.import_record('test-org:dup')

        with self.assertRaises(InfradotsValidationError):
            self.workspaces.adopt(ORG, 'dup')

        self.assertEqual(self.workspaces.resolve(ORG, name='dup')['id'], first)
        self.module.warn.assert_called_once()

    def test_adopt(self):
        created = self.workspaces.create(workspace_desired())
        self.assertEqual(self.workspaces.adopt(ORG, 'test-workspace')['id'], created['id'])
        self.assertIsNone(self.workspaces.adopt(ORG, 'missing'))

    def test_resolve_by_id_requires_organization(self):
        with self.assertRaises(InfradotsValidationError):
            self.workspaces.resolve(record_id='some-id')
        with self.assertRaises(InfradotsValidationError):
            self.workspaces.resolve(ORG)
        self.assertEqual(self.api.requests, [])

    def test_resolve_by_id(self):
        created = self.workspaces.create(workspace_desired())
        self.assertEqual(self.workspaces.resolve(ORG, record_id=created['id'])['name'], 'test-workspace')

    def test_resolve_by_id_not_found(self):
        with self.assertRaises(InfradotsNotFoundError):
            self.workspaces.resolve(ORG, record_id='missing')


class TestVariableAdapter(AdapterTestCase):

    def test_organization_variable(self):
        created = self.variables.create({'organization_name': 'test-org', 'key': 'region', 'value': 'eu-west-1'})

        call = self.api.calls('POST')[0]
        self.assertEqual(call['path'], '/api/organizations/test-org/variables/')
        self.assertEqual(call['payload'], {
            'key': 'region',
            'value': 'eu-west-1',
            'description': '',
            'category': 'terraform',
            'sensitive': False,
            'hcl': False,
        })
        self.assertEqual(self.variables.read(created), created)

    def test_workspace_variable_and_three_segment_import(self):
        created = self.variables.create({
            'organization_name': 'test-org',
            'workspace_name': 'test-workspace',
            'key': 'region',
            'value': 'eu-west-1',
            'category': 'env',
        })
        self.assertEqual(
            self.api.calls('POST')[0]['path'],
            '/api/organizations/test-org/workspaces/test-workspace/variables/'
        )

        imported = self.variables.import_record('test-org:test-workspace:region')
        self.assertEqual(imported['id'], created['id'])
        self.assertEqual(imported['workspace_name'], 'test-workspace')
        self.assertEqual(imported['category'], 'env')

        with self.assertRaises(InfradotsNotFoundError):
            self.variables.import_record('test-org:region')

    def test_sensitive_value_is_retained(self):
        created = self.variables.create({
            'organization_name': 'test-org',
            'key': 'password',
            'value': 's3cr3t',
            'sensitive': True,
        })
        self.assertEqual(created['value'], 's3cr3t')

        refreshed = self.variables.read(created)
        self.assertEqual(refreshed['value'], 's3cr3t')
        self.assertEqual(self.variables.to_result(refreshed)['value'], '***SENSITIVE***')

    def test_sensitive_flag_set_to_false_is_sent(self):
        created = self.variables.create({
            'organization_name': 'test-org',
            'key': 'password',
            'value': 's3cr3t',
            'sensitive': True,
        })
        self.variables.update({'key': 'password', 'sensitive': False}, created)
        self.assertEqual(self.api.calls('PATCH')[0]['payload'], {'sensitive': False})

    def test_invalid_category(self):
        with self.assertRaises(InfradotsValidationError):
            self.variables.create({'organization_name': 'test-org', 'key': 'k', 'value': 'v', 'category': 'other'})


class TestVCSAdapter(AdapterTestCase):

    def test_wire_names_and_write_only_secret(self):
        created = self.vcs.create(vcs_desired())

        payload = self.api.calls('POST')[0]['payload']
        self.assertEqual(payload, {
            'name': 'github',
            'vcsType': 'github',
            'endpoint': 'https://github.com',
            'clientId': 'abc123',
            'clientSecret': 'shh',
            'description': '',
        })
        self.assertEqual(created['vcs_type'], 'github')
        self.assertEqual(created['client_secret'], 'shh')

        refreshed = self.vcs.read(created)
        self.assertEqual(refreshed['client_secret'], 'shh')
        self.assertNotIn('client_secret', self.vcs.to_result(refreshed))

    def test_secret_rotation(self):
        created = self.vcs.create(vcs_desired())
        updated = self.vcs.update(vcs_desired(client_secret='rotated'), created)

        self.assertEqual(self.api.calls('PATCH')[0]['payload'], {'clientSecret': 'rotated'})
        self.assertEqual(updated['client_secret'], 'rotated')
        self.assertEqual(self.api.secrets[created['id']], 'rotated')

    def test_import_has_no_secret(self):
        self.vcs.create(vcs_desired())
        imported = self.vcs.import_record('test-org:github')
        self.assertIsNone(imported['client_secret'])
        self.assertEqual(imported['client_id'], 'abc123')


if __name__ == '__main__':
    unittest.main()
