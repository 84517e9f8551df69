"""
Quick demo script to run the YourDayIn API locally.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting YourDayIn Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Place lookup:     POST http://localhost:8000/places/lookup")
    print("   - Recommendations:  POST http://localhost:8000/recommendations")
    print("   - Loop route:       POST http://localhost:8000/routes")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"location": "Paris", "coordinates": [2.35, 48.86]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "yourdayin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
