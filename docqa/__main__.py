import uvicorn

from docqa.config import PORT


def main():
    uvicorn.run("docqa.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
