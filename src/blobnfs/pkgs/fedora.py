import shutil

from blobnfs.pkgs.base import PackageManager
from blobnfs.runner.command import run_command


class FedoraPackageManager(PackageManager):
    def __init__(self):
        if shutil.which("dnf"):
            self.pm = "dnf"
        elif shutil.which("yum"):
            self.pm = "yum"
        else:
            raise Exception("No package manager found (dnf or yum)")

    def update(self):
        run_command([self.pm, "makecache"])

    def install(self, package):
        run_command([self.pm, "install", "-y", package])

    def is_installed(self, package) -> bool:
        return run_command(["rpm", "-q", package], check=False).ok
