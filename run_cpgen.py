from cpgen import generate_password

def main() -> None:
    password = generate_password()  # uses DEFAULT_REQUEST settings from config.py
    print("\n[Constrained Password Generator]")
    print(f"Generated password: {password}\n")

if __name__ == "__main__":
    main()
