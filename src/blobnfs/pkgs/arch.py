from blobnfs.pkgs.base import PackageManager
from blobnfs.runner.command import run_command


class ArchPackageManager(PackageManager):
    def update(self):
        run_command(["pacman", "-Sy"])

    def install(self, package):
        run_command(["pacman", "-S", "--noconfirm", "--needed", package])

    def is_installed(self, package) -> bool:
        return run_command(["pacman", "-Q", package], check=False).ok
