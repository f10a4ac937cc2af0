#!/usr/bin/env python3
"""
Example usage of Snapshot Binding.

This script demonstrates how to bind a store snapshot to declared
classes, catch a misspelled key, and serialize the result back.
"""

import json
import logging
from snapshot_binding import (
    BindableObject,
    BindableSnapshot,
    BindingFailure,
    DataSnapshot,
    SnapshotMapper,
)


class Profile(BindableObject):
    @classmethod
    def declare_bindings(cls, registrar):
        registrar.bind_field("age", value_type=int)
        registrar.bind_field("city", value_type=str)


class Post(BindableSnapshot):
    @classmethod
    def declare_bindings(cls, registrar):
        registrar.bind_field("title")
        registrar.bind_field("likes", value_type=int)


class User(BindableSnapshot):
    @classmethod
    def declare_bindings(cls, registrar):
        registrar.bind_field("name")
        registrar.bind_field("isAdmin", attribute="is_admin", value_type=bool)
        registrar.bind_object("profile", Profile)
        registrar.bind_list("posts", Post)
        registrar.bind_dictionary("flags", value_type=bool)


def main():
    """Main example function."""
    logging.basicConfig(level=logging.INFO)
    print("Snapshot Binding Example")
    print("=" * 50)

    sample_node = {
        "name": "Alice Johnson",
        "isAdmin": False,
        "profile": {"age": 30, "city": "New York"},
        "posts": {
            "-Nq1": {"title": "My First Post", "likes": 4},
            "-Nq2": {"title": "Second Thoughts", "likes": 11},
        },
        "betaTester": True,
        "newsletter": False,
    }

    mapper = SnapshotMapper()
    user = mapper.parse(DataSnapshot("user_001", sample_node), User)

    print(f"\n👤 {user.name} ({user.id}), {user.profile.age} years, {user.profile.city}")
    for post in user.posts:
        print(f"   📝 {post.id}: {post.title} ({post.likes} likes)")
    print(f"   🚩 Flags: {user.flags}")

    # A misspelled key is reported by name
    sample_node["profile"]["ctiy"] = "Boston"
    try:
        mapper.parse(DataSnapshot("user_001", sample_node), User)
    except BindingFailure as e:
        print(f"\n❌ Binding failed at key '{e.key}': {e.cause}")

    print("\n🔄 Serialized back:")
    print(json.dumps(mapper.serialize(user), indent=2))


if __name__ == "__main__":
    main()
