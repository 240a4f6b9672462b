"""
Builds the fixed lesson tree every new session starts from.

Layout:
    /
        home/
            users/
                user/
                    Documents/
                        Tests/
                            test1.txt, test2.txt, test3.txt, .test4.txt
        bin/
        usr/
        etc/
        lib/
"""

import logging

from unix_tutor_mcp.models.node import DEFAULT_GROUP, DEFAULT_OWNER, DirectoryNode, NodeStore
from unix_tutor_mcp.models.session import ShellSession

logger = logging.getLogger(__name__)

SYSTEM_DIRS = ("home", "bin", "usr", "etc", "lib")
SYSTEM_MODE = "644"
SYSTEM_DATE = "Jan 9 18:20"

HIDDEN_TEXT = (
    "Bacon ipsum dolor amet proident bresaola corned beef, spare ribs capicola sint chicken\n"
    "officia. Frankfurter irure enim ullamco, esse adipisicing sirloin pork commodo sunt.\n"
    "Reprehenderit t-bone hamburger tri-tip filet mignon id consequat ut cillum ground round\n"
    "meatball andouille. Aliqua pork chop tail, burgdoggen leberkas aute in."
)

# (name, content, last modified)
LESSON_FILES = [
    ("test1.txt", "test 1: 1\n1\n2\n3", "Feb 12 12:11"),
    ("test2.txt", "test2: test 3, 2, 1", "Feb 14 12:11"),
    ("test3.txt", "test3: Hello :^)", "Apr 9 15:15"),
    (".test4.txt", HIDDEN_TEXT, "Apr 10 12:35"),
]


def _system_dir(store: NodeStore, parent: DirectoryNode, name: str, owner: str, group: str) -> DirectoryNode:
    node = store.create_directory(name, mode=SYSTEM_MODE, owner=owner, group=group, last_modified=SYSTEM_DATE)
    store.add_child(parent, node)
    return node


def build_session(max_files: int = 20, owner: str = DEFAULT_OWNER, group: str = DEFAULT_GROUP) -> ShellSession:
    """
    Create a fresh session on the lesson tree.

    Home is /home/users/user and the session starts in its Documents
    directory. Seeded nodes do not count against the creation quota.
    """
    store = NodeStore()
    root = store.create_directory("/", mode=SYSTEM_MODE, owner=owner, group=group, last_modified=SYSTEM_DATE)

    system = {name: _system_dir(store, root, name, owner, group) for name in SYSTEM_DIRS}
    users = _system_dir(store, system["home"], "users", owner, group)
    home = _system_dir(store, users, "user", owner, group)

    documents = store.create_directory("Documents", mode="755", owner=owner, group=group, last_modified="Mar 7 14:20")
    store.add_child(home, documents)
    tests = store.create_directory("Tests", mode="755", owner=owner, group=group, last_modified="Mar 8 08:00")
    store.add_child(documents, tests)

    for name, content, last_modified in LESSON_FILES:
        node = store.create_file(
            name, mode="644", owner=owner, group=group, content=content, last_modified=last_modified
        )
        store.add_child(tests, node)

    logger.debug(f"Lesson tree built with {len(store)} nodes")
    return ShellSession(
        store=store,
        root_id=root.id,
        home_id=home.id,
        cwd_id=documents.id,
        max_files=max_files,
        owner=owner,
        group=group,
    )
