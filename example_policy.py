#!/usr/bin/env python3
"""Example: build a policy locally, then grant a role on a real project."""

import sys

from pdum.iam import Identity, Policy, Project, Role


def main():
    policy = (
        Policy.builder()
        .add_identity(Role.viewer(), Identity.user("alice@example.com"), Identity.all_authenticated_users())
        .add_identity(Role.editor(), Identity.group("ops@example.com"))
        .build()
    )
    print("Local policy:")
    for binding in policy.to_api_repr()["bindings"]:
        print(f"  {binding['role']}: {', '.join(binding['members'])}")

    if len(sys.argv) < 3:
        print("\nUsage: example_policy.py PROJECT_ID MEMBER  (e.g. user:bob@example.com)")
        return

    project = Project(id=sys.argv[1])
    updated = project.add_binding(Role.viewer(), sys.argv[2])
    print(f"\n{project.full_resource_name()} now has {len(updated.bindings)} role bindings (etag {updated.etag})")


if __name__ == "__main__":
    main()
