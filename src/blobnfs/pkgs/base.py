from abc import ABC, abstractmethod


class PackageManager(ABC):
    # Distro package providing mount.nfs
    nfs_client_package = "nfs-utils"
    samba_package = "samba"

    @abstractmethod
    def update(self):
        pass

    @abstractmethod
    def install(self, package):
        pass

    @abstractmethod
    def is_installed(self, package) -> bool:
        pass
