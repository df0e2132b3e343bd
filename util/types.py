# util/types.py
from typing import Dict

from model.kv import KVFile

# Flow: relative path -> encoded file record, built once by the tree walk.
KVFiles = Dict[str, KVFile]
