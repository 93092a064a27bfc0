"""CLI command implementations for cabinet-wms.

This package contains the commands of the cabinet-wms CLI:
- nest: Nest a cutting-list file
- serve: Run the REST API
- init-db / add-user: Administer the SQLite store
"""

from cabinet_wms.cli.commands.admin import add_user_command, init_db_command
from cabinet_wms.cli.commands.nest import nest_command
from cabinet_wms.cli.commands.serve import serve_command

__all__ = ["add_user_command", "init_db_command", "nest_command", "serve_command"]
