#!/usr/bin/env python3
"""
Child process helpers.
"""

import psutil


def kill_process_tree(pid: int) -> None:
    """Kill a process and all its children (compiler drivers fork cc1/ld)."""
    try:
        parent = psutil.Process(pid)
        children = parent.children(recursive=True)

        for child in children:
            try:
                child.kill()
            except psutil.NoSuchProcess:
                pass
        psutil.wait_procs(children, timeout=3)

        try:
            parent.kill()
            parent.wait(3)
        except (psutil.NoSuchProcess, psutil.TimeoutExpired):
            pass
    except psutil.NoSuchProcess:
        pass  # Process already gone
