from video_api.main import run

run()
