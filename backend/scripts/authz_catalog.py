#!/usr/bin/env python
"""Validate / inspect the permission catalog and role table.

Usage:
    python backend/scripts/authz_catalog.py --validate                 # exit 2 when the table is invalid
    python backend/scripts/authz_catalog.py --show-roles               # role -> permission counts
    python backend/scripts/authz_catalog.py --export-json roles.json   # role -> permissions + checksum
    python backend/scripts/authz_catalog.py --fail-if-changed <sha256> # exit 4 when bundles changed
"""
from __future__ import annotations
import os, sys, argparse, textwrap, json

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from hubconsole.services.role_table import (  # type: ignore
    AuthzConfigError, build_default_role_table, role_permission_map, roles_checksum,
)


def print_role_summary(table):
    rows = [(r.id, r.module_type, len(r.permissions), sorted(r.permissions)[:6]) for r in table.roles()]
    name_w = max(len(r[0]) for r in rows)
    print(f"{'Role'.ljust(name_w)} | Module | Count | Sample (up to 6)")
    print('-' * (name_w + 50))
    for name, module, cnt, sample in rows:
        print(f"{name.ljust(name_w)} | {module.ljust(6)} | {str(cnt).rjust(5)} | {', '.join(sample)}")
    for alias, target in sorted(table.aliases.items()):
        print(f"{alias.ljust(name_w)} -> {target}")


def parse_args():
    p = argparse.ArgumentParser(
        description="Inspect the authorization catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  validate: authz_catalog.py --validate\n  export: authz_catalog.py --export-json\n""")
    )
    p.add_argument('--validate', action='store_true', help='Build the role table and report problems; exits 2 on failure')
    p.add_argument('--show-roles', action='store_true', help='Print role permission counts')
    p.add_argument('--export-json', nargs='?', const='-', metavar='FILE', help='Export role->permissions JSON (to FILE or stdout if omitted)')
    p.add_argument('--fail-if-changed', metavar='CHECKSUM', help='Exit 4 if computed roles checksum differs from provided value')
    return p.parse_args()


def main():
    args = parse_args()
    try:
        table = build_default_role_table()
    except AuthzConfigError as e:
        print('[VALIDATION] FAIL:')
        for problem in e.problems:
            print(' -', problem)
        sys.exit(2)
    if args.validate:
        print(f'[VALIDATION] OK: {len(table)} roles, {len(table.all_permissions())} permissions.')

    if args.show_roles:
        print('\nRole Permission Summary:')
        print_role_summary(table)

    checksum = roles_checksum(table)
    if args.fail_if_changed:
        if checksum != args.fail_if_changed:
            print(f"[CHECKSUM] MISMATCH: expected {args.fail_if_changed} got {checksum}")
            sys.exit(4)
        print(f"[CHECKSUM] OK: {checksum}")

    if args.export_json is not None:
        role_perm_map = role_permission_map(table)
        payload = {
            'roles': role_perm_map,
            'aliases': dict(table.aliases),
            'meta': {
                'permissions_total': len(table.all_permissions()),
                'distinct_granted': len({p for plist in role_perm_map.values() for p in plist}),
                'roles_checksum_sha256': checksum,
                'role_names_sorted': sorted(role_perm_map.keys()),
            }
        }
        if args.export_json == '-':
            print(json.dumps(payload, indent=2, sort_keys=True))
        else:
            with open(args.export_json, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, sort_keys=True)
            print(f"[INFO] Exported JSON to {args.export_json}")


if __name__ == '__main__':
    main()
