import os

# keep test runs from writing the attempt log next to the sources
os.environ.setdefault("UB_ATTEMPT_LOG", "")
