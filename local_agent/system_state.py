import psutil


def free_bytes(path):
    return psutil.disk_usage(str(path)).free


def check_free_space(path, needed):
    """Return (enough, free) for writing ``needed`` bytes next to ``path``."""
    free = free_bytes(path)
    return free >= needed, free
