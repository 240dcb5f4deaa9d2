from .loader import AssetLoader, FileSystemAssetLoader, MemoryAssetLoader
