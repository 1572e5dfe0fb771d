"""Default seed filesystem and session defaults.

The seed is a template only. Every session validates it into its own tree, so
nothing here is ever mutated.
"""

from typing import Any

DEFAULT_HOME = "/home/user"
DEFAULT_USER = "user"
DEFAULT_PATH = "/usr/bin:/usr/local/bin"
DEFAULT_HISTORY_LIMIT = 500

DEFAULT_SEED: dict[str, Any] = {
    "type": "directory",
    "children": {
        "home": {
            "type": "directory",
            "children": {
                "user": {
                    "type": "directory",
                    "children": {
                        "documents": {
                            "type": "directory",
                            "children": {
                                "readme.txt": {
                                    "type": "file",
                                    "content": (
                                        "Welcome to the Linux Mastery Game!\n"
                                        "Learn Linux commands by completing challenges."
                                    ),
                                },
                                "notes.txt": {
                                    "type": "file",
                                    "content": (
                                        "Remember:\n"
                                        "- pwd shows current directory\n"
                                        "- ls lists files\n"
                                        "- cd changes directory"
                                    ),
                                },
                            },
                        },
                        "projects": {
                            "type": "directory",
                            "children": {
                                "game": {
                                    "type": "directory",
                                    "children": {
                                        "main.py": {
                                            "type": "file",
                                            "content": (
                                                "#!/usr/bin/env python3\n"
                                                'print("Hello, Linux!")'
                                            ),
                                        },
                                    },
                                },
                            },
                        },
                        ".bashrc": {
                            "type": "file",
                            "content": (
                                "# Bash configuration file\n"
                                "export PATH=$PATH:/usr/local/bin"
                            ),
                        },
                    },
                },
            },
        },
        "etc": {
            "type": "directory",
            "children": {
                "passwd": {
                    "type": "file",
                    "content": (
                        "root:x:0:0:root:/root:/bin/bash\n"
                        "user:x:1000:1000:user:/home/user:/bin/bash"
                    ),
                },
            },
        },
        "var": {
            "type": "directory",
            "children": {
                "log": {
                    "type": "directory",
                    "children": {
                        "system.log": {
                            "type": "file",
                            "content": (
                                "[INFO] System started successfully\n"
                                "[INFO] All services running"
                            ),
                        },
                    },
                },
            },
        },
        "usr": {
            "type": "directory",
            "children": {
                "bin": {"type": "directory", "children": {}},
                "local": {
                    "type": "directory",
                    "children": {
                        "bin": {"type": "directory", "children": {}},
                    },
                },
            },
        },
    },
}
