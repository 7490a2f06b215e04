from __future__ import annotations

from pathlib import Path

from PIL import Image as PILImage

from dn2_py_sdk.images import Image
from dn2_py_sdk.nukem2.replacements import (
    ImageReplacement,
    RawReplacement,
    ReplacementKey,
    ReplacementKind,
    ReplacementResolver,
)
from dn2_py_sdk.paths import GamePaths


def _write_png(path: Path, size: tuple[int, int] = (2, 3), color=(10, 20, 30, 40)) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.new("RGBA", size, color).save(path)


def test_keys_derived_from_asset_names() -> None:
    tileset = ReplacementKey.for_asset_name("CZONE3.MNI")
    assert tileset == ReplacementKey(ReplacementKind.TILESET, "3")
    assert tileset.filename == "tileset3.png"

    assert ReplacementKey.for_asset_name("czonea.mni").filename == "tileseta.png"
    assert ReplacementKey.for_asset_name("DROP12.MNI").filename == "backdrop12.png"
    assert ReplacementKey.for_actor_frame(159, 12).filename == "actor159_frame12.png"


def test_names_outside_conventions_have_no_key() -> None:
    for name in ("CZONE12.MNI", "CZONE.MNI", "DROPA.MNI", "DROP1.PNG", "XCZONE1.MNI", "SB_1.MNI"):
        assert ReplacementKey.for_asset_name(name) is None


def test_resolve_prefers_unpacked_file(tmp_path: Path) -> None:
    paths = GamePaths.from_game_dir(tmp_path)
    (tmp_path / "CZONE3.MNI").write_bytes(b"raw tiles")
    _write_png(paths.replacements_dir / "tileset3.png")

    found = ReplacementResolver(paths).resolve("CZONE3.MNI")

    assert isinstance(found, RawReplacement)
    assert found.data == b"raw tiles"


def test_resolve_pattern_image(tmp_path: Path) -> None:
    paths = GamePaths.from_game_dir(tmp_path)
    _write_png(paths.replacements_dir / "backdrop4.png")

    found = ReplacementResolver(paths).resolve("DROP4.MNI")

    assert isinstance(found, ImageReplacement)
    assert (found.image.width, found.image.height) == (2, 3)
    assert found.image.pixel_at(0, 0) == (10, 20, 30, 40)


def test_malformed_png_is_treated_as_absent(tmp_path: Path) -> None:
    paths = GamePaths.from_game_dir(tmp_path)
    paths.replacements_dir.mkdir(parents=True)
    (paths.replacements_dir / "tileset1.png").write_bytes(b"definitely not a png")

    resolver = ReplacementResolver(paths)

    assert resolver.resolve("CZONE1.MNI") is None


def test_nothing_to_resolve(tmp_path: Path) -> None:
    resolver = ReplacementResolver(GamePaths.from_game_dir(tmp_path))

    assert resolver.resolve("CZONE1.MNI") is None
    assert resolver.resolve("TEXT.MNI") is None
    assert resolver.actor_frame_image(1, 0) is None


def test_actor_frame_image(tmp_path: Path) -> None:
    repl = tmp_path / "custom"
    paths = GamePaths.from_game_dir(tmp_path, repl)
    _write_png(repl / "actor5_frame2.png", size=(4, 4))

    image = ReplacementResolver(paths).actor_frame_image(5, 2)

    assert isinstance(image, Image)
    assert image.width == 4


def test_png_over_pillow_pixel_limit_is_treated_as_absent(tmp_path: Path, monkeypatch) -> None:
    paths = GamePaths.from_game_dir(tmp_path)
    _write_png(paths.replacements_dir / "backdrop1.png", size=(40, 40))
    monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 100)

    assert ReplacementResolver(paths).resolve("DROP1.MNI") is None
