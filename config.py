# config.py
# UI defaults and limits. The engines take everything through their constructors.

# === Partition allocation ===
DEFAULT_TOTAL_MEMORY_KB = 1000           # single-block region size
DEFAULT_PARTITIONS = "100, 500, 200, 300, 600"
DEFAULT_PROCESS_SIZE_KB = 100

# === Paging ===
MIN_FRAMES = 1
MAX_FRAMES = 10
DEFAULT_FRAMES = 3
DEFAULT_REFERENCE_STRING = "7 0 1 2 0 3 0 4 2 3 0 3 2"

# === Charts / log ===
UTILIZATION_HISTORY_LIMIT = 20           # points kept on the utilization line chart
LOG_DISPLAY_LIMIT = 20                   # most recent log entries shown
