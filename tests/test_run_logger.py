import json
from configuration import parse_config
from run_logger import log_run

def test_log_run_appends_json_lines(tmp_path):
    cfg = parse_config("7\n110\n*.*.*..\n3\n1,0\n2,1\n")
    log_file = tmp_path / "nested" / "runs.log"    # nested dir exercises mkdir

    log_run(cfg, 2, 3, "<", log_file=log_file)
    log_run(cfg, 2, 3, "<", log_file=log_file)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    entry = json.loads(lines[0])
    assert entry["rule"] == 110
    assert entry["size"] == 7
    assert entry["total_steps"] == 3 + 2 + 3
    assert entry["density"] == "<"
    assert entry["ts"].endswith("Z")
