import logging

import numpy as np

from srepkit.logging_config import setup_logging
from srepkit.visualization import srep_to_polydata


def test_polydata_has_one_line_per_spoke(srep):
    poly = srep_to_polydata(srep)
    assert poly.GetNumberOfCells() == 9 + 9 + 8
    assert poly.GetNumberOfPoints() == 2 * 26
    types = poly.GetCellData().GetArray('spokeType')
    values = [types.GetValue(i) for i in range(types.GetNumberOfTuples())]
    assert values.count(0) == 9 and values.count(1) == 9 and values.count(2) == 8
    tip = srep.grid[0, 0].up_spoke.getB()
    assert np.allclose(poly.GetPoint(1), tip)


def test_polydata_of_selected_kinds(srep):
    assert srep_to_polydata(srep, kinds=('crest',)).GetNumberOfCells() == 8


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    log_file = str(tmp_path / "srepkit.log")
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.INFO, log_file=log_file)
    assert len(logger.handlers) == 2
    logger.info("interpolation done")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    with open(log_file) as f:
        assert "interpolation done" in f.read()
