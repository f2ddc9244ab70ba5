import tempfile
import time
from pathlib import Path

from pathwatcher import CallbackEventHandler, create_instance


def make_printer(label):
    def callback(sender, kind, event_args):
        print(f"[{label}] {kind}: {getattr(event_args, 'full_path', event_args)}")
    return CallbackEventHandler(callback)


with tempfile.TemporaryDirectory() as tmp:
    # Watch a directory; file writes inside it show up as changes.
    with create_instance(tmp, make_printer("first")) as watcher:
        watcher.disposed.subscribe(lambda sender, _: print(f"Closed {sender.full_path}"))
        watcher.start_watching()

        Path(tmp, "notes.txt").write_text("hello")
        time.sleep(1)

        # Swapping the handler keeps the watcher running.
        watcher.handler = make_printer("second")
        print("Still watching:", watcher.is_watching)

        Path(tmp, "notes.txt").write_text("hello again")
        time.sleep(1)
