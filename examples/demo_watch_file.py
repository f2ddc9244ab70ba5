import os
import tempfile
import time

from pathwatcher import LoggingEventHandler, create_instance
from pathwatcher.logger import setup_logger

# Log everything the watcher forwards to the console.
logger = setup_logger("demo", level="DEBUG")

# Create a scratch file to watch.
fd, path = tempfile.mkstemp(suffix=".txt")
os.close(fd)

watcher = create_instance(path, LoggingEventHandler(logger))
print(f"Kind: {watcher.kind.value}, name: {watcher.name}, mime type: {watcher.mime_type}")

watcher.start_watching()

# Touch the file a few times.
for i in range(3):
    with open(path, "a") as f:
        f.write(f"line {i}\n")
    time.sleep(1)

watcher.close()
os.remove(path)
print("Done.")
