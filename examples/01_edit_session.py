"""
Example 01: Compression Editing Session
=======================================

Demonstrates the core editing loop of CompressSession:
- Opening a session when a recording enters compression mode
- Deleting, modifying and inserting messages
- Rendering the preview and token statistics
- Undo / redo / reset
- Subscribing to overlay events for re-rendering

Run:
    uv run python examples/01_edit_session.py
"""

import sys
from pathlib import Path

# Add project root to path when running directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def main() -> None:
    from chisel import CompressSession, EditorEvent, NarrativeMessage, TextBlock
    from chisel.models.message import ToolResultBlock, ToolUseBlock

    print("=== Chisel Compression Editing Example ===\n")

    messages = [
        NarrativeMessage(
            id="msg_001",
            role="user",
            content=[TextBlock(content="Find every TODO in the repository and summarise them.")],
        ),
        NarrativeMessage(
            id="msg_002",
            role="assistant",
            content=[
                TextBlock(content="Searching for TODO markers."),
                ToolUseBlock(id="call_1", name="grep", input={"pattern": "TODO", "path": "."}),
            ],
        ),
        NarrativeMessage(
            id="msg_003",
            role="user",
            content=[ToolResultBlock(tool_use_id="call_1", content="src/a.py:12: TODO fix\n" * 40)],
        ),
        NarrativeMessage(
            id="msg_004",
            role="assistant",
            content=[TextBlock(content="There are 40 TODOs, all in src/a.py, about error handling.")],
        ),
    ]

    with CompressSession.open(session_id="demo") as editor:
        editor.subscribe(
            EditorEvent.OVERLAY_CHANGED,
            lambda event, payload: print(
                f"  [{payload['action']}] undo={payload['can_undo']} redo={payload['can_redo']}"
            ),
        )

        editor.modify_message(messages[2], "grep found 40 TODO markers in src/a.py")
        editor.delete_message(messages[1])
        editor.insert_message(-1, "user", "Context: this is a Python repository.")

        print("\nPreview:")
        for entry in editor.get_preview_messages(messages):
            extra = ""
            if entry.operation == "delete":
                extra = f" (saves {entry.tokens_saved} tokens)"
            elif entry.operation == "modify":
                extra = f" (delta {entry.token_delta:+d} tokens)"
            print(f"  {entry.operation:>6}  {entry.id}{extra}")

        stats = editor.get_token_stats(messages)
        print(
            f"\nTokens: {stats.original_total} -> {stats.compressed_total} "
            f"(saved {stats.saved_tokens}, {stats.saved_percentage:.1f}%)"
        )

        editor.undo()
        print(f"\nAfter undo: {editor.get_change_stats()}")
        editor.redo()
        editor.reset_all()
        print(f"After reset: has_any_changes={editor.has_any_changes}")
        editor.undo()
        print(f"After undoing the reset: {editor.get_change_stats()}")


if __name__ == "__main__":
    main()
