from blobnfs.pkgs.base import PackageManager
from blobnfs.runner.command import run_command


class DebianPackageManager(PackageManager):
    nfs_client_package = "nfs-common"

    def update(self):
        run_command(["apt-get", "update"])

    def install(self, package):
        run_command(["apt-get", "install", "-y", package])

    def is_installed(self, package) -> bool:
        result = run_command(["dpkg-query", "-W", "-f=${Status}", package], check=False)
        return result.ok and "install ok installed" in result.stdout
