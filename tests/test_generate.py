"""Tests for generate.py and cli.py — end-to-end phantom files."""

import struct
import sys

import numpy as np
import pytest

from voxelgen import cli, slabs
from voxelgen.errors import AllocationError, OutputOpenError
from voxelgen.generate import generate_phantom
from voxelgen.reader import read_volume
from voxelgen.shapes import Cube, CubeWithSphericalCavity, ShapeKind, Sphere


class TestGeneratePhantom:
    def test_sphere_n_100(self, tmp_path):
        path = tmp_path / "sphere.dat"
        report = generate_phantom(path, ShapeKind.SPHERE, n=100)
        config, volume = read_volume(path)
        assert config.n_voxel == (42, 42, 42)
        assert volume.size == 42 ** 3
        assert path.stat().st_size == 64 + 8 * 42 ** 3
        assert volume[21, 21, 21] == 1.0
        assert volume[0, 0, 0] == 0.0
        assert volume[41, 41, 41] == 0.0
        assert report.header_length == 64
        assert report.body_length == 8 * 42 ** 3
        assert report.slab_count == 1

    def test_body_matches_evaluator(self, tmp_path, small_config):
        path = tmp_path / "cavity.dat"
        generate_phantom(path, ShapeKind.CUBE_WITH_SPHERICAL_CAVITY, n=100,
                         slab_height=5, workers=3)
        _, volume = read_volume(path)
        cavity = CubeWithSphericalCavity(small_config)
        for y, z, x in [(0, 0, 0), (21, 21, 21), (10, 3, 40), (41, 0, 20)]:
            assert volume[y, z, x] == cavity(x, y, z)

    def test_sphere_and_cavity_fill_cube(self, tmp_path):
        generate_phantom(tmp_path / "s.dat", ShapeKind.SPHERE, n=60)
        generate_phantom(tmp_path / "c.dat", ShapeKind.CUBE_WITH_SPHERICAL_CAVITY, n=60)
        generate_phantom(tmp_path / "k.dat", ShapeKind.CUBE, n=60)
        _, sphere = read_volume(tmp_path / "s.dat")
        _, cavity = read_volume(tmp_path / "c.dat")
        _, cube = read_volume(tmp_path / "k.dat")
        np.testing.assert_array_equal(sphere + cavity, cube)
        assert cube.min() == 1.0

    def test_deterministic(self, tmp_path):
        generate_phantom(tmp_path / "a.dat", ShapeKind.SPHERE, n=80, workers=1)
        generate_phantom(tmp_path / "b.dat", ShapeKind.SPHERE, n=80,
                         slab_height=7, workers=4)
        assert (tmp_path / "a.dat").read_bytes() == (tmp_path / "b.dat").read_bytes()

    def test_raw_mode(self, tmp_path, small_config):
        path = tmp_path / "raw.dat"
        report = generate_phantom(path, ShapeKind.CUBE, n=100, raw=True)
        assert path.stat().st_size == 8 * 42 ** 3
        assert report.header_length == 0
        _, volume = read_volume(path, config=small_config)
        assert volume.min() == 1.0

    def test_header_fields(self, tmp_path, small_config):
        path = tmp_path / "cube.dat"
        generate_phantom(path, n=100)
        values = struct.unpack("=16i", path.read_bytes()[:64])
        assert values == small_config.header_values()

    def test_shape_code(self, tmp_path):
        report = generate_phantom(tmp_path / "s.dat", 2, n=100)
        assert report.shape_kind is ShapeKind.SPHERE
        report = generate_phantom(tmp_path / "k.dat", 7, n=100)
        assert report.shape_kind is ShapeKind.CUBE
        _, volume = read_volume(tmp_path / "k.dat")
        assert volume.min() == 1.0

    def test_missing_directory(self, tmp_path):
        path = tmp_path / "missing" / "out.dat"
        with pytest.raises(OutputOpenError):
            generate_phantom(path, n=100)
        assert not path.exists()

    def test_allocation_before_open(self, tmp_path, monkeypatch):
        def fail(*args, **kwargs):
            raise MemoryError()

        monkeypatch.setattr(slabs.np, "empty", fail)
        path = tmp_path / "out.dat"
        with pytest.raises(AllocationError):
            generate_phantom(path, n=100)
        assert not path.exists()

    def test_show_progress(self, tmp_path, capsys):
        generate_phantom(tmp_path / "out.dat", n=100, slab_height=20, show=True)
        out = capsys.readouterr().out
        assert "slab 1/3: layers 0-19" in out
        assert "slab 3/3: layers 40-41" in out

    def test_summary(self, tmp_path):
        report = generate_phantom(tmp_path / "out.dat", n=100)
        lines = report.summary()
        assert "\tVoxel model size: %d byte" % (8 * 42 ** 3) in lines
        assert "\tImage type: 64 bit real" in lines
        assert "\tImage width: 42 pixels" in lines
        assert "\tImage height: 42 pixels" in lines
        assert "\tOffset to first image: 64 bytes" in lines
        assert "\tNumber of images: 42" in lines
        assert "\tGap between images: 0 bytes" in lines
        assert lines[-1].strip().lower().startswith(sys.byteorder)


class TestCli:
    def test_success(self, tmp_path, capsys):
        path = tmp_path / "out.dat"
        assert cli.main([str(path), "2", "100"]) == 0
        assert "Number of images: 42" in capsys.readouterr().out
        _, volume = read_volume(path)
        assert volume[21, 21, 21] == 1.0

    def test_object_type_only(self, tmp_path, monkeypatch):
        calls = {}

        def fake_generate(path, shape_kind, **kwargs):
            calls.update(kwargs, shape_kind=shape_kind)
            raise OutputOpenError("stop")

        monkeypatch.setattr(cli, "generate_phantom", fake_generate)
        assert cli.main([str(tmp_path / "out.dat"), "1"]) == 2
        assert calls["shape_kind"] is ShapeKind.CUBE_WITH_SPHERICAL_CAVITY
        assert calls["n"] is None
        assert calls["raw"] is False

    def test_unknown_object_type_is_cube(self, tmp_path):
        path = tmp_path / "out.dat"
        assert cli.main([str(path), "9", "60"]) == 0
        _, volume = read_volume(path)
        assert volume.min() == 1.0

    def test_non_integer_object_type_is_cube(self, tmp_path):
        path = tmp_path / "out.dat"
        assert cli.main([str(path), "abc", "60"]) == 0
        _, volume = read_volume(path)
        assert volume.min() == 1.0

    @pytest.mark.parametrize("text, code", [("2", 2), ("abc", None), ("", None), ("-1", -1)])
    def test_object_code(self, text, code):
        assert cli.object_code(text) == code

    @pytest.mark.parametrize("argv", [
        [],
        ["a.dat", "1", "100", "extra"],
        ["a.dat", "2", "0"],
        ["a.dat", "2", "-5"],
    ])
    def test_usage_error(self, argv, capsys):
        assert cli.main(argv) == 1
        assert "usage" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path):
        path = tmp_path / "missing" / "out.dat"
        assert cli.main([str(path), "2", "100"]) == 2
        assert not path.exists()

    def test_raw_flag(self, tmp_path):
        path = tmp_path / "out.dat"
        assert cli.main([str(path), "3", "100", "--raw"]) == 0
        assert path.stat().st_size == 8 * 42 ** 3

    def test_raw_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VOXEL_MODEL_RAW", "yes")
        path = tmp_path / "out.dat"
        assert cli.main([str(path), "3", "100"]) == 0
        assert path.stat().st_size == 8 * 42 ** 3

    def test_allocation_error_code(self, tmp_path, monkeypatch):
        def fail(*args, **kwargs):
            raise MemoryError()

        monkeypatch.setattr(slabs.np, "empty", fail)
        assert cli.main([str(tmp_path / "out.dat"), "2", "100"]) == 5
