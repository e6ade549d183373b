"""Static subscribe form served at ``GET /``."""

LANDING_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>UR-ly</title>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
           max-width: 600px; margin: 50px auto; padding: 20px; background: #f5f5f5; }
    .container { background: white; padding: 30px; border-radius: 10px;
                 box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
    h1 { color: #333; margin: 0 0 5px 0; font-size: 32px; }
    .subtitle { color: #666; font-size: 18px; margin: 0 0 20px 0; }
    .info { background: #e3f2fd; color: #1976d2; padding: 15px; border-radius: 5px;
            margin-bottom: 20px; font-size: 14px; }
    .form-group { margin-bottom: 20px; }
    label { display: block; margin-bottom: 5px; font-weight: 500; color: #555; }
    input { width: 100%; padding: 10px; border: 1px solid #ddd; border-radius: 5px;
            font-size: 14px; box-sizing: border-box; }
    button { width: 100%; padding: 12px; background: #0070f3; color: white; border: none;
             border-radius: 5px; font-size: 16px; cursor: pointer; }
    button:hover { background: #0051cc; }
    #result { margin-top: 20px; padding: 10px; border-radius: 5px; display: none; }
    .success { background: #d4edda; color: #155724; display: block; }
    .error { background: #f8d7da; color: #721c24; display: block; }
  </style>
</head>
<body>
  <div class="container">
    <h1>UR-ly</h1>
    <p class="subtitle">Early vacancy alerts for UR rentals</p>
    <div class="info">
      Get a Slack message as soon as rooms open up in the UR property you are watching.
    </div>

    <form id="subscribeForm">
      <div class="form-group">
        <label for="propertyUrl">UR Property URL *</label>
        <input type="url" id="propertyUrl" name="propertyUrl" required
               placeholder="https://www.ur-net.go.jp/chintai/kanto/tokyo/00_0000.html">
      </div>
      <div class="form-group">
        <label for="webhookUrl">Slack Webhook URL *</label>
        <input type="url" id="webhookUrl" name="webhookUrl" required
               placeholder="https://hooks.slack.com/services/T00000000/B00000000/XXXXX">
      </div>
      <div class="form-group">
        <label for="threshold">Vacancy Threshold (Minimum Count)</label>
        <input type="number" id="threshold" name="threshold" value="1" min="0">
      </div>
      <button type="submit">Subscribe</button>
    </form>

    <div id="result"></div>
  </div>

  <script>
    document.getElementById('subscribeForm').addEventListener('submit', async (e) => {
      e.preventDefault();
      const data = Object.fromEntries(new FormData(e.target));
      const resultDiv = document.getElementById('result');
      try {
        const response = await fetch('/subscribe', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(data)
        });
        const result = await response.json();
        if (!response.ok) {
          throw new Error(result.error || 'Registration failed');
        }
        resultDiv.className = 'success';
        resultDiv.textContent = 'Subscribed! ID: ' + result.id;
        e.target.reset();
      } catch (error) {
        resultDiv.className = 'error';
        resultDiv.textContent = 'Error: ' + error.message;
      }
    });
  </script>
</body>
</html>
"""
