from pathlib import Path
from typing import Dict, Union


# ------------------------------------------------------------------
# Well-known digests
# ------------------------------------------------------------------

EMPTY_DIGESTS = {
    "md4": "31d6cfe0d16ae931b73c59d7e0c089c0",
    "md5": "d41d8cd98f00b204e9800998ecf8427e",
    "sha1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
    "sha256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    "sha512": (
        "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
        "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
    ),
    "blake2b256": "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8",
    "blake2b512": (
        "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
        "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce"
    ),
    "blake3": "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262",
    "sha3224": "6b4e03423667dbb73b6e15454f0eb1abd4597f9a1b078e3f5b5a6bc7",
    "sha3256": "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a",
    "sha3384": (
        "0c63a75b845e4f7d01107d852e4c2485c51a50aaaa94fc61995e71bbee983a2a"
        "c3713831264adb47fb6bd1e058d5f004"
    ),
    "sha3512": (
        "a69f73cca23a9ac5c8b567dc185a756e97c982164fe25859e0d1dcc1475c80a6"
        "15b2123af1f5f94c11e3e9402c3ac558f500199d95b6d3e301758586281dcd26"
    ),
}

# Digests of the five bytes b"hello"
HELLO_DIGESTS = {
    "md5": "5d41402abc4b2a76b9719d911017c592",
    "sha1": "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d",
    "sha256": "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824",
    "blake2b256": "324dcf027dd4a30a932c441f365a25e86b173defa4b8e58948253471b81b72cf",
    "sha3256": "3338be694f50c5f338814986cdf0686453a888b84f424d792af4b9202398f392",
}


# ------------------------------------------------------------------
# File trees
# ------------------------------------------------------------------

def write_file(root: Path, relpath: str, content: Union[bytes, str]) -> Path:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode("utf-8")
    path.write_bytes(content)
    return path


def make_tree(root: Path, files: Dict[str, Union[bytes, str]]) -> Dict[str, Path]:
    """Create every file in ``files`` under ``root`` and return their paths."""
    return {relpath: write_file(root, relpath, content) for relpath, content in files.items()}


def patterned_bytes(size: int) -> bytes:
    """Deterministic non-trivial content of the given size."""
    block = bytes(range(256))
    return (block * (size // len(block) + 1))[:size]
