class RepoInspectorError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(RepoInspectorError):
    # errors related to configuration.
    pass

class DiscoveryError(RepoInspectorError):
    # errors during file discovery.
    pass

class RootNotDirectoryError(DiscoveryError):
    # the discovery root is missing or is not a directory.
    pass

class RootIsSymlinkError(DiscoveryError):
    # the discovery root is itself a symbolic link.
    pass

class ContentReadError(RepoInspectorError):
    # a file could not be stat-ed, opened or read.
    pass

class ContentDecodeError(RepoInspectorError):
    # file content is not valid utf-8.
    pass

class OutputError(RepoInspectorError):
    # errors during output operations.
    pass
