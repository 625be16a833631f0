from college_id.main import run

run()
