"""Host description attached to benchmark results."""
import logging
import platform
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)

CPUINFO_PATH = "/proc/cpuinfo"
MIB = 1024 * 1024


@dataclass
class SysInfo:
    os: str = ""
    arch: str = ""
    cpu_model: str = ""
    cores: int = 0
    threads: int = 0
    cpu_used: int = 0
    ram_mb: int = 0

    def to_dict(self):
        return {
            "OS": self.os,
            "Arch": self.arch,
            "CPUModel": self.cpu_model,
            "Cores": self.cores,
            "Threads": self.threads,
            "UsedCPUCount": self.cpu_used,
            "RAM_MB": self.ram_mb,
        }


def read_cpu_model(cpuinfo_path=CPUINFO_PATH):
    """
    CPU marketing name. Linux only exposes it in /proc/cpuinfo;
    platform.processor() there is usually just the architecture or empty.
    """
    try:
        with open(cpuinfo_path, encoding="utf-8", errors="replace") as fh:
            for line in fh:
                key, sep, value = line.partition(":")
                if sep and key.strip() == "model name":
                    return value.strip()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("[systeminfo]: could not read %s: %s", cpuinfo_path, e)
    return platform.processor()


def collect_sysinfo(cpu_used=0):
    """
    Gather OS, architecture, CPU model, core counts and RAM.

    Never raises: a field that cannot be read keeps its empty default and a
    warning is logged, since a missing host detail must not stop a benchmark.
    """
    info = SysInfo(cpu_used=cpu_used)
    info.os = platform.system().lower()
    info.arch = platform.machine()
    info.cpu_model = read_cpu_model()

    try:
        info.cores = psutil.cpu_count(logical=False) or 0
        info.threads = psutil.cpu_count(logical=True) or 0
    except (psutil.Error, OSError) as e:
        logger.warning("[systeminfo]: failed to get CPU counts: %s", e)

    try:
        info.ram_mb = psutil.virtual_memory().total // MIB
    except (psutil.Error, OSError) as e:
        logger.warning("[systeminfo]: failed to get memory size: %s", e)

    return info
