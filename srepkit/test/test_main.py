import logging
import xml.etree.ElementTree as ET

from srepkit.__main__ import main
from srepkit.io import export_srep, read_srep


def _reset_logger():
    logger = logging.getLogger("srepkit")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_cli_interpolates(tmp_path, srep):
    header = export_srep(srep, str(tmp_path / "in"), "coarse")
    out_dir = tmp_path / "out"
    try:
        assert main([header, "--output-dir", str(out_dir), "--base-name", "dense", "--level", "2"]) == 0
    finally:
        _reset_logger()
    dense = read_srep(str(out_dir / "dense-header.xml"))
    assert (dense.grid.rows, dense.grid.cols, len(dense.crest)) == (9, 9, 32)


def test_cli_reports_failures(tmp_path, srep):
    header = export_srep(srep, str(tmp_path / "in"), "coarse")
    try:
        assert main([header, "--output-dir", str(tmp_path / "out"), "--level", "2", "--max-points", "10"]) == 1
        assert main([str(tmp_path / "missing-header.xml"), "--output-dir", str(tmp_path / "out")]) == 1
    finally:
        _reset_logger()
    assert not (tmp_path / "out").exists()


def test_cli_reports_malformed_header(tmp_path, srep):
    header = export_srep(srep, str(tmp_path / "in"), "coarse")
    tree = ET.parse(header)
    tree.getroot().find('nRows').text = 'three'
    tree.write(header)
    try:
        assert main([header, "--output-dir", str(tmp_path / "out")]) == 1
    finally:
        _reset_logger()
    assert not (tmp_path / "out").exists()
