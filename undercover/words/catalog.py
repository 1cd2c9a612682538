"""
Word-pair catalog: packaged default pairs plus a persisted overlay of custom edits.
"""

import json
import random
from dataclasses import dataclass, replace, asdict
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional

import yaml


DEFAULT_WORDS_FILE = Path(__file__).resolve().parent / "default_words.yaml"
CUSTOM_ID_START = 100000


class WordCatalogError(Exception):
    """Raised when the catalog cannot satisfy a request."""


@dataclass
class WordPair:
    """Two related words: one for the civilians, one for the undercovers."""
    civilian: str
    undercover: str
    category: str
    id: Optional[int] = None
    is_default: bool = False

    def swapped(self) -> "WordPair":
        return replace(self, civilian=self.undercover, undercover=self.civilian)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_default_pairs(path: Optional[Path] = None) -> List[WordPair]:
    """
    Load default pairs from YAML. The file maps category name to a list of
    ``[civilian, undercover]`` entries; ids are assigned 1..N in file order.
    """
    words_file = Path(path) if path else DEFAULT_WORDS_FILE
    with open(words_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    pairs = []
    for category, entries in data.items():
        for civilian, undercover in entries:
            pairs.append(WordPair(
                civilian=str(civilian),
                undercover=str(undercover),
                category=str(category),
                id=len(pairs) + 1,
                is_default=True,
            ))
    return pairs


class WordCatalog:
    """Keyed word-pair store with CRUD, category listing and random draws."""

    def __init__(self, defaults: Optional[List[WordPair]] = None, custom_path: Optional[str] = None):
        self.defaults = list(defaults) if defaults is not None else load_default_pairs()
        self.custom_path = Path(custom_path) if custom_path else None
        self._lock = RLock()
        self.custom_pairs: List[WordPair] = []
        self.deleted_default_ids: List[int] = []
        self.modified_defaults: Dict[int, Dict[str, str]] = {}
        self.next_custom_id = CUSTOM_ID_START
        self._load()

    # ------------------------------
    # Persistence
    # ------------------------------
    def _load(self) -> None:
        if not self.custom_path or not self.custom_path.exists():
            return
        try:
            with open(self.custom_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Warning: could not read custom words from {self.custom_path}: {e}")
            return

        self.custom_pairs = [
            WordPair(civilian=p["civilian"], undercover=p["undercover"], category=p["category"], id=p["id"])
            for p in data.get("custom_pairs", [])
        ]
        self.deleted_default_ids = list(data.get("deleted_default_ids", []))
        self.modified_defaults = {int(k): v for k, v in data.get("modified_defaults", {}).items()}
        self.next_custom_id = data.get("next_custom_id", CUSTOM_ID_START)
        print(f"Loaded {len(self.custom_pairs)} custom word pairs, "
              f"{len(self.deleted_default_ids)} deleted defaults")

    def _save(self) -> None:
        if not self.custom_path:
            return
        data = {
            "custom_pairs": [
                {"id": p.id, "civilian": p.civilian, "undercover": p.undercover, "category": p.category}
                for p in self.custom_pairs
            ],
            "deleted_default_ids": self.deleted_default_ids,
            "modified_defaults": {str(k): v for k, v in self.modified_defaults.items()},
            "next_custom_id": self.next_custom_id,
        }
        with open(self.custom_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    # ------------------------------
    # Queries
    # ------------------------------
    def _default_by_id(self, pair_id: int) -> Optional[WordPair]:
        for pair in self.defaults:
            if pair.id == pair_id:
                return pair
        return None

    def _effective_default(self, pair: WordPair) -> WordPair:
        modified = self.modified_defaults.get(pair.id)
        if not modified:
            return replace(pair)
        return replace(pair, **modified)

    def get_all_pairs(self) -> List[WordPair]:
        """Defaults (minus deleted, with edits applied) followed by custom pairs."""
        with self._lock:
            pairs = [
                self._effective_default(pair)
                for pair in self.defaults
                if pair.id not in self.deleted_default_ids
            ]
            pairs.extend(replace(pair) for pair in self.custom_pairs)
            return pairs

    def get_pairs_by_category(self, category: str) -> List[WordPair]:
        return [pair for pair in self.get_all_pairs() if pair.category == category]

    def get_categories(self) -> List[Dict[str, Any]]:
        """Categories with their pair counts, sorted by name."""
        counts: Dict[str, int] = {}
        for pair in self.get_all_pairs():
            counts[pair.category] = counts.get(pair.category, 0) + 1
        return [{"name": name, "count": counts[name]} for name in sorted(counts)]

    def category_names(self) -> List[str]:
        return [category["name"] for category in self.get_categories()]

    def total_pairs(self) -> int:
        return len(self.get_all_pairs())

    def draw(self, selected_categories: Iterable[str], rng: Optional[random.Random] = None) -> WordPair:
        """
        Draw a random pair from the selected categories.

        Falls back to the whole catalog when the selection is empty or matches
        nothing. Which word goes to the civilians is decided by a fresh coin flip
        on every draw.
        """
        rng = rng or random.Random()
        selected = set(selected_categories or [])
        all_pairs = self.get_all_pairs()
        candidates = [pair for pair in all_pairs if pair.category in selected]
        if not candidates:
            candidates = all_pairs
        if not candidates:
            raise WordCatalogError("The word catalog is empty")

        pair = rng.choice(candidates)
        if rng.random() < 0.5:
            return pair.swapped()
        return pair

    # ------------------------------
    # Mutations
    # ------------------------------
    def add_pair(self, civilian: str, undercover: str, category: str) -> WordPair:
        with self._lock:
            pair = WordPair(
                civilian=civilian.strip(),
                undercover=undercover.strip(),
                category=category.strip(),
                id=self.next_custom_id,
            )
            self.next_custom_id += 1
            self.custom_pairs.append(pair)
            self._save()
            return replace(pair)

    def add_bulk(self, entries: Iterable[Dict[str, Any]]) -> List[WordPair]:
        """Add many pairs at once; entries missing a field are skipped."""
        added = []
        with self._lock:
            for entry in entries:
                civilian = (entry.get("civilian") or "").strip()
                undercover = (entry.get("undercover") or "").strip()
                category = (entry.get("category") or "").strip()
                if not (civilian and undercover and category):
                    continue
                pair = WordPair(civilian=civilian, undercover=undercover, category=category, id=self.next_custom_id)
                self.next_custom_id += 1
                self.custom_pairs.append(pair)
                added.append(replace(pair))
            if added:
                self._save()
        return added

    def update_pair(self, pair_id: int, civilian: Optional[str] = None, undercover: Optional[str] = None,
                    category: Optional[str] = None) -> Optional[WordPair]:
        """Update a pair in place. Returns None if no such pair exists."""
        updates = {
            key: value.strip()
            for key, value in (("civilian", civilian), ("undercover", undercover), ("category", category))
            if value is not None
        }
        with self._lock:
            if pair_id < CUSTOM_ID_START:
                original = self._default_by_id(pair_id)
                if original is None or pair_id in self.deleted_default_ids:
                    return None
                current = self._effective_default(original)
                merged = {
                    "civilian": updates.get("civilian", current.civilian),
                    "undercover": updates.get("undercover", current.undercover),
                    "category": updates.get("category", current.category),
                }
                self.modified_defaults[pair_id] = merged
                self._save()
                return replace(original, **merged)

            for index, pair in enumerate(self.custom_pairs):
                if pair.id == pair_id:
                    self.custom_pairs[index] = replace(pair, **updates)
                    self._save()
                    return replace(self.custom_pairs[index])
            return None

    def delete_pair(self, pair_id: int) -> bool:
        with self._lock:
            if pair_id < CUSTOM_ID_START:
                if self._default_by_id(pair_id) is None or pair_id in self.deleted_default_ids:
                    return False
                self.deleted_default_ids.append(pair_id)
                self.modified_defaults.pop(pair_id, None)
                self._save()
                return True

            for index, pair in enumerate(self.custom_pairs):
                if pair.id == pair_id:
                    del self.custom_pairs[index]
                    self._save()
                    return True
            return False

    def rename_category(self, old_name: str, new_name: str) -> int:
        """Rename a category across defaults and custom pairs. Returns pairs renamed."""
        new_name = new_name.strip()
        renamed = 0
        with self._lock:
            for pair in self.defaults:
                if pair.id in self.deleted_default_ids:
                    continue
                current = self._effective_default(pair)
                if current.category == old_name:
                    self.modified_defaults[pair.id] = {
                        "civilian": current.civilian,
                        "undercover": current.undercover,
                        "category": new_name,
                    }
                    renamed += 1
            for index, pair in enumerate(self.custom_pairs):
                if pair.category == old_name:
                    self.custom_pairs[index] = replace(pair, category=new_name)
                    renamed += 1
            if renamed:
                self._save()
        return renamed

    def delete_category(self, name: str) -> int:
        """Delete every pair in a category. Returns pairs deleted."""
        deleted = 0
        with self._lock:
            for pair in self.defaults:
                if pair.id in self.deleted_default_ids:
                    continue
                if self._effective_default(pair).category == name:
                    self.deleted_default_ids.append(pair.id)
                    self.modified_defaults.pop(pair.id, None)
                    deleted += 1
            before = len(self.custom_pairs)
            self.custom_pairs = [pair for pair in self.custom_pairs if pair.category != name]
            deleted += before - len(self.custom_pairs)
            if deleted:
                self._save()
        return deleted

    def reset_to_defaults(self) -> int:
        """Drop all custom data. Returns the number of default pairs."""
        with self._lock:
            self.custom_pairs = []
            self.deleted_default_ids = []
            self.modified_defaults = {}
            self.next_custom_id = CUSTOM_ID_START
            if self.custom_path and self.custom_path.exists():
                self.custom_path.unlink()
        return len(self.defaults)
