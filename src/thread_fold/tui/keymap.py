"""Key → action table for the message list.

Textual BINDINGS are not used - ThreadFoldApp.on_key is the sole dispatcher.
Fold keys come from settings (advisory, user may rebind); navigation keys
are fixed.
"""

from thread_fold.app.settings_store import FoldSettings

# [LAW:one-source-of-truth] Fixed keys. Configurable fold keys are layered on top.
BASE_KEYMAP: dict[str, str] = {
    "j": "cursor_down",
    "down": "cursor_down",
    "k": "cursor_up",
    "up": "cursor_up",
    "r": "mark_read",
    "g": "refresh_list",
    "v": "toggle_message_view",
    "[": "fold_command('fold_all')",
    "left_square_bracket": "fold_command('fold_all')",
    "]": "fold_command('unfold_all')",
    "right_square_bracket": "fold_command('unfold_all')",
    "q": "quit",
}

# Commands whose key is read from settings ("key:<command>").
CONFIGURABLE_COMMANDS = ("toggle_at_point", "toggle_all", "fold_at_point", "unfold_at_point")


def build_keymap(settings: FoldSettings) -> dict[str, str]:
    keymap = dict(BASE_KEYMAP)
    for command in CONFIGURABLE_COMMANDS:
        key = settings.key_for(command)
        if key:
            keymap[key] = f"fold_command('{command}')"
    return keymap
