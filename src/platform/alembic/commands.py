"""
Schema migration entry points

Installed as console scripts (`migrate`, `rollback`, `make-migration`,
`migration-history`, `migration-current`). Each returns a process exit code.
"""

import sys
from typing import Callable

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic.util import CommandError

from src.platform.constant.path import ALEMBIC_DIR
from src.platform.logging.loguru_io import Logger


ALEMBIC_INI = ALEMBIC_DIR / 'alembic.ini'


def alembic_config() -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option('script_location', str(ALEMBIC_DIR))
    return config


def head_revision() -> str | None:
    return ScriptDirectory.from_config(alembic_config()).get_current_head()


def _run(description: str, action: Callable[[Config], None]) -> int:
    Logger.base.info(f'🗄️  [MIGRATION] {description}')
    try:
        action(alembic_config())
    except CommandError as e:
        Logger.base.error(f'❌ [MIGRATION] {description} failed: {e}')
        return 1
    return 0


def upgrade() -> int:
    return _run(f'Upgrading to head ({head_revision()})', lambda c: command.upgrade(c, 'head'))


def downgrade() -> int:
    return _run('Rolling back one revision', lambda c: command.downgrade(c, '-1'))


def make_migration() -> int:
    if len(sys.argv) < 2:
        Logger.base.error("Usage: make-migration 'migration message'")
        return 1

    message = ' '.join(sys.argv[1:])
    return _run(
        f'Creating migration: {message}',
        lambda c: command.revision(c, message=message, autogenerate=True),
    )


def history() -> int:
    return _run('Revision history', lambda c: command.history(c, verbose=True))


def current() -> int:
    return _run('Current revision', lambda c: command.current(c, verbose=True))
