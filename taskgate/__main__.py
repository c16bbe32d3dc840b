from taskgate.main import run

run()
