from minigit_desktop.main import run_desktop

run_desktop()
