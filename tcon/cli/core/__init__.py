#!/usr/bin/env python3
"""
Core functionality for TCon CLI tools.

Re-exports the console helpers and settings access used by the apps.
"""

from tcon.cli.core.ui import (
    console,
    print_warning,
    print_error,
    print_success,
    print_pipeline_table,
    print_mesh_summary,
    print_operations_table,
)

from tcon.cli.core.config import (
    load_config,
    save_config,
    get_config_value,
    set_config_value,
    reset_config,
    parse_config_value,
    update_recent_pipelines,
    normalize_log_level,
    SETTING_USAGE,
)
